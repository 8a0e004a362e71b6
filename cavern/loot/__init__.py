"""Item tables and loot placement."""
