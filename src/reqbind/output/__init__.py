"""Output layer — render BindResult for humans or machines."""
