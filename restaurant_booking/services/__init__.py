"""Services for restaurant search, ranking and booking."""
