"""Model catalog normalization and selection.

The models endpoints have returned plain strings, objects with several
naming conventions, and envelopes around either. ``normalize_models`` turns
any of them into ``ModelDescriptor`` entries and never raises.
"""

import logging
import re
from typing import TYPE_CHECKING, Any

from hexy.client.decoders import unwrap_list
from hexy.client.errors import ApiError
from hexy.models.schemas import ModelDescriptor, ModelSelection

if TYPE_CHECKING:
    from hexy.client.api_client import HexyClient

logger = logging.getLogger(__name__)

MODEL_ENVELOPE_KEYS = ("models", "data")
CATALOG_UNAVAILABLE_MESSAGE = "Unable to load model list. Showing defaults."

_SEPARATORS = re.compile(r"[_/-]+")


def _descriptor(value: str, label: str, tier: str = "free", recommended: bool = False) -> ModelDescriptor:
    return ModelDescriptor(value=value, label=label, tier=tier, recommended=recommended)


# Offline fallback when neither models endpoint returns anything usable.
DEFAULT_MODEL_OPTIONS: tuple[ModelDescriptor, ...] = (
    _descriptor("kwaipilot/kat-coder-pro:free", "Kwai Kat Coder Pro", recommended=True),
    _descriptor("nvidia/nemotron-nano-12b-v2-vl:free", "NVIDIA Nemotron Nano VL"),
    _descriptor("z-ai/glm-4.5-air:free", "Z-AI GLM 4.5 Air"),
    _descriptor(
        "cognitivecomputations/dolphin-mistral-24b-venice-edition:free",
        "Dolphin Mistral Venice",
    ),
    _descriptor(
        "mistralai/mistral-small-3.1-24b-instruct:free", "Mistral Small 3.1", recommended=True
    ),
    _descriptor("deepseek/deepseek-chat-v3.1:free", "DeepSeek Chat V3.1", recommended=True),
    _descriptor("meta-llama/llama-3.3-8b-instruct:free", "Llama 3.3 8B"),
    _descriptor("alibaba/tongyi-deepresearch-30b-a3b:free", "Tongyi DeepResearch"),
    _descriptor("openai/gpt-oss-20b:free", "GPT OSS 20B"),
    _descriptor("openrouter/sherlock-dash-alpha", "Sherlock Dash Alpha", tier="premium"),
    _descriptor("meituan/longcat-flash-chat:free", "Longcat Flash Chat"),
    _descriptor("nousresearch/hermes-3-llama-3.1-405b:free", "Hermes 3 Llama 405B"),
    _descriptor("mistralai/mistral-nemo:free", "Mistral Nemo", recommended=True),
    _descriptor("moonshotai/kimi-k2:free", "Kimi K2"),
)


def prettify_label(value: str) -> str:
    """Derive a display label from a model identifier.

    Runs of ``_``, ``/`` and ``-`` become single spaces and every word gets
    an upper-case first letter, e.g. ``"meta-llama/llama"`` ->
    ``"Meta Llama Llama"``.
    """
    if not value:
        return ""
    words = _SEPARATORS.sub(" ", value).split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words).strip()


def _first(item: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if item.get(key):
            return item[key]
    return None


def _normalize_entry(item: Any) -> ModelDescriptor | None:
    if not item:
        return None

    if isinstance(item, str):
        return ModelDescriptor(value=item, label=prettify_label(item))

    if not isinstance(item, dict):
        return None

    value = _first(item, "value", "name", "id")
    if not value:
        return None
    value = str(value)

    label = _first(item, "label", "display_name")
    tier = _first(item, "tier", "plan")
    if not tier:
        tier = "premium" if item.get("is_premium") else "free"

    return ModelDescriptor(
        value=value,
        label=str(label) if label else prettify_label(value),
        tier=str(tier),
        recommended=bool(_first(item, "recommended", "is_recommended", "highlight")),
    )


def normalize_models(raw: Any) -> list[ModelDescriptor]:
    """Normalize a raw catalog response into model descriptors.

    Args:
        raw: A list of strings or objects, or ``{"models": [...]}`` /
             ``{"data": [...]}`` wrapping one.

    Returns:
        Descriptors for every entry with a resolvable value; an empty list
        for input that is not list-like.
    """
    items = raw if isinstance(raw, tuple) else unwrap_list(raw, MODEL_ENVELOPE_KEYS)
    descriptors = []
    for item in items:
        descriptor = _normalize_entry(item)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors


def ensure_selected_model(
    models: list[ModelDescriptor],
    selected: str | None,
) -> str | None:
    """Keep ``selected`` if it is offered, otherwise pick the first model."""
    if not models:
        return selected
    if any(model.value == selected for model in models):
        return selected
    return models[0].value


async def load_model_options(
    client: "HexyClient",
    selected: str | None = None,
) -> ModelSelection:
    """Load the models a picker should offer.

    Tries the user's models first, then the public catalog, then the
    built-in defaults. A failure of the user's models is only logged; a
    failure of the public catalog is reported through ``error``.

    Args:
        client: API client to query.
        selected: Currently selected model value.

    Returns:
        ModelSelection with the options and a valid selection.
    """
    try:
        user_models = normalize_models(await client.get_user_models())
    except ApiError as e:
        logger.warning(f"Error fetching user-specific models: {e}")
        user_models = []

    if user_models:
        return ModelSelection(
            options=user_models,
            selected=ensure_selected_model(user_models, selected),
        )

    defaults = list(DEFAULT_MODEL_OPTIONS)
    try:
        all_models = normalize_models(await client.get_all_models())
    except ApiError as e:
        logger.error(f"Error fetching models: {e}")
        return ModelSelection(
            options=defaults,
            selected=ensure_selected_model(defaults, selected),
            error=CATALOG_UNAVAILABLE_MESSAGE,
        )

    options = all_models or defaults
    return ModelSelection(options=options, selected=ensure_selected_model(options, selected))
