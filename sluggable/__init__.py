# sluggable/__init__.py
from .core.exceptions import ConfigurationError
from .core.options import SluggableOptions
from .core.sluggable import SluggableMixin
from .core.models import SoftDeleteMixin
from .core.events import register_sluggable_listeners, unregister_sluggable_listeners
from .core.locale import get_locale, set_locale, use_locale
from .core.cache.tagged_cache import TaggedCache, sluggable_cache

__version__ = "1.0.0"
