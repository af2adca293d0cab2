from .loader import InvalidPayloadError, PayloadLoader, load_payload
from .preprocess import normalize_text, description_words

__all__ = ["InvalidPayloadError", "PayloadLoader", "load_payload", "normalize_text", "description_words"]
