"""Built-in validation rules."""
