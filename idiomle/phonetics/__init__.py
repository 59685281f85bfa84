from .provider import PhoneticForm, PhoneticProvider, PypinyinProvider, TableProvider
from .cache import PhoneticCache

__all__ = ["PhoneticForm", "PhoneticProvider", "PypinyinProvider", "TableProvider", "PhoneticCache"]
