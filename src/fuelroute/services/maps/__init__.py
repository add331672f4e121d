"""Map store services."""
