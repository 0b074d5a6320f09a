"""iScore CLI — Click commands and Rich output."""
