"""Model catalog helpers for the model picker."""

from hexy.catalog.models import (
    DEFAULT_MODEL_OPTIONS,
    ensure_selected_model,
    load_model_options,
    normalize_models,
    prettify_label,
)

__all__ = [
    "DEFAULT_MODEL_OPTIONS",
    "ensure_selected_model",
    "load_model_options",
    "normalize_models",
    "prettify_label",
]
