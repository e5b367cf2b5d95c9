"""Infrastructure layer — route declarations and mapping artifacts."""
