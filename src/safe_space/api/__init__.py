"""HTTP layer: exception handlers and versioned routers."""
