"""Response validation and normalization for the storefront integrations."""
