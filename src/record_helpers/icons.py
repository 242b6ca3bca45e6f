"""Icon helper: alias resolution and icon markup.

Icons are configured as named sets (font, images, svg-sprite, unicode) plus an
alias map, e.g.::

    sets:
      FontAwesome: {template: font, prefix: "fa fa-", src: vendor/font-awesome.min.css}
      Fugue: {template: images, src: icons}
    aliases:
      cart: FontAwesome:shopping-cart
      cart-rtl: Fugue:cart-rtl.png
      basket: Alias:cart
      spinner: FontAwesome:spinner:fa-spin

An alias value is ``Set:icon[:extra classes]``; the ``Alias`` pseudo-set points
at another alias name.
"""
import hashlib
import json
import logging
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from markupsafe import Markup

from .config import Config
from .utils.error_handling import CircularAliasError, HelperError, IconSetError

logger = logging.getLogger(__name__)

ALIAS_SET = 'Alias'

Attrs = Union[str, Dict[str, Any], None]


class BlackHoleCache:
    """Cache that never stores anything."""

    def get_item(self, key: str) -> Optional[str]:
        return None

    def set_item(self, key: str, value: str) -> None:
        pass


class MemoryCache:
    """Process-wide in-memory cache, safe to share between request threads."""

    def __init__(self):
        self._lock = RLock()
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


def default_image_link(path: str) -> str:
    """Resolve an image path against the configured image base URL."""
    return f"{Config.IMAGE_BASE_URL.rstrip('/')}/{path}"


def _class_list(*classes: Optional[str]) -> str:
    return ' '.join(c for c in classes if c)


def _compile_attrs(attrs: Dict[str, Any]) -> Markup:
    return Markup('').join(
        Markup(' {}="{}"').format(key, value) for key, value in attrs.items()
    )


class Icon:
    """Renders icons by name, following aliases to a configured icon set."""

    def __init__(self, config: Dict[str, Any], cache=None,
                 image_link: Optional[Callable[[str], str]] = None, rtl: bool = False):
        self.config = config
        self.sets: Dict[str, Dict[str, Any]] = config.get('sets') or {}
        self.icon_map: Dict[str, str] = config.get('aliases') or {}
        self.default_set: str = config.get('defaultSet') or Config.ICON_DEFAULT_SET
        self.cache = cache if cache is not None else BlackHoleCache()
        self.image_link = image_link or default_image_link
        self.rtl = rtl
        # Stylesheets needed by the font sets used so far, for the page head
        self.stylesheets: List[str] = []

    def map_icon(self, name: str) -> Tuple[str, str, Optional[str]]:
        """
        Resolve a name to (icon, set name, extra classes).

        Raises:
            CircularAliasError: if the alias chain revisits a name
        """
        visited = set()
        while True:
            icon = self.icon_map.get(name + '-rtl') if self.rtl else None
            if icon is None:
                icon = self.icon_map.get(name, name)

            set_name = self.default_set
            extra = None
            if ':' in icon:
                # Extra classes may themselves contain colons
                parts = icon.split(':', 2)
                set_name, icon = parts[0], parts[1]
                extra = parts[2] if len(parts) > 2 else None

            if set_name != ALIAS_SET:
                return icon, set_name, extra

            visited.add(name)
            if icon in visited:
                raise CircularAliasError(icon)
            name = icon

    def __call__(self, name: str, attrs: Attrs = None) -> Markup:
        """
        Render an icon.

        Args:
            name: Icon name or alias
            attrs: Extra HTML attributes; a string is shorthand for extra classes
        """
        if isinstance(attrs, str):
            attrs = {'class': attrs}
        attrs = dict(attrs or {})

        icon, set_name, extra = self.map_icon(name)
        icon_set = self.sets.get(set_name)
        if icon_set is None:
            raise IconSetError(set_name, icon)
        self._register_stylesheet(icon_set)

        cache_key = self.cache_key(name, attrs)
        cached = self.cache.get_item(cache_key)
        if cached is None:
            cached = str(self._render(icon_set, icon, attrs, extra)).strip()
            self.cache.set_item(cache_key, cached)
        return Markup(cached)

    @staticmethod
    def cache_key(name: str, attrs: Dict[str, Any]) -> str:
        # An empty attribute set hashes as "[]"
        encoded = json.dumps(attrs or [], separators=(',', ':')).encode('utf-8')
        return f"{name}+{hashlib.md5(encoded).hexdigest()}"

    def _register_stylesheet(self, icon_set: Dict[str, Any]) -> None:
        src = icon_set.get('src')
        if icon_set.get('template') == 'font' and src and src not in self.stylesheets:
            logger.debug(f"Icon stylesheet required: {src}")
            self.stylesheets.append(src)

    def _render(self, icon_set: Dict[str, Any], icon: str, attrs: Dict[str, Any],
                extra: Optional[str]) -> Markup:
        attrs = dict(attrs)
        attr_class = attrs.pop('class', None)
        extra_attrs = _compile_attrs(attrs)
        template = icon_set.get('template')

        if template == 'font':
            classes = _class_list(
                'icon', 'icon--font', icon_set.get('prefix', '') + icon, attr_class, extra
            )
            return Markup(
                '<span class="{}"{} role="img" aria-hidden="true"></span>'
            ).format(classes, extra_attrs)
        if template == 'unicode':
            classes = _class_list('icon', 'icon--font', 'icon--unicode', attr_class, extra)
            return Markup(
                '<span class="{}"{} role="img" aria-hidden="true" data-icon="&#x{};"></span>'
            ).format(classes, extra_attrs, icon)
        if template == 'images':
            classes = _class_list('icon', 'icon--img', attr_class, extra)
            src = self.image_link(f"{icon_set.get('src', '')}/{icon}")
            return Markup(
                '<img class="{}" src="{}"{} aria-hidden="true" alt="">'
            ).format(classes, src, extra_attrs)
        if template == 'svg-sprite':
            classes = _class_list('icon', 'icon--svg', attr_class, extra)
            href = self.image_link(icon_set.get('src', '')) + '#' + icon
            return Markup(
                '<svg class="{}"{} aria-hidden="true">\n'
                '    <use xlink:href="{}"></use>\n'
                '</svg>'
            ).format(classes, extra_attrs, href)

        raise HelperError(f"Unknown icon template '{template}' for icon '{icon}'")
