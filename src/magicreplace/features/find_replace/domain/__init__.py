"""Domain model of the find & replace workflow."""
