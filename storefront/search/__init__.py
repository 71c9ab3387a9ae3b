from .debouncer import DEFAULT_DELAY_MS, SearchDebouncer

__all__ = ["SearchDebouncer", "DEFAULT_DELAY_MS"]
