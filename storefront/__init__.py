"""
Client-side catalog/cart synchronization engine for the storefront.
"""
from .orchestrator import CatalogCartOrchestrator, build_orchestrator

__all__ = ["CatalogCartOrchestrator", "build_orchestrator"]
