from .conditional_resolver import ConditionalResolver

__all__ = ["ConditionalResolver"]
