"""
Modifier resolution: built-in transformations plus caller-supplied ones.

A modifier is a named pure function called with the extracted value (or the
values of a list-of-paths field, unpacked) followed by the params declared in
the schema. Built-ins take precedence; any other name is looked up on the
caller's capability object.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from ..exceptions import DataTransformationError, UnknownModifier
from ..interfaces import ModifierProviderInterface
from ..models import ModifierRef
from ..utils import NumberUtils, StringUtils


def to_i(value: Any) -> int:
    return NumberUtils.leading_int(value)


def to_f(value: Any) -> float:
    return NumberUtils.leading_float(value)


def to_s(value: Any) -> str:
    return '' if value is None else str(value)


def strip(value: Any) -> str:
    return to_s(value).strip()


def upcase(value: Any) -> str:
    return to_s(value).upper()


def downcase(value: Any) -> str:
    return to_s(value).lower()


def capitalize(value: Any) -> str:
    return to_s(value).capitalize()


def squish(value: Any) -> str:
    return StringUtils.normalize_whitespace(value)


def numbers_only(value: Any) -> str:
    return StringUtils.extract_numbers_only(value)


def join(*args: Any) -> str:
    """
    Join values with a separator.

    The separator is the last argument, so a list-of-paths field declares it as
    its only param: ``{name: join, params: [" "]}``.
    """
    if len(args) < 2:
        raise ValueError("join needs at least one value and a separator")
    *values, separator = args
    return str(separator).join(to_s(v) for v in values)


def default_if_blank(value: Any, fallback: Any) -> Any:
    return fallback if StringUtils.is_blank(value) else value


BUILTIN_MODIFIERS: Dict[str, Callable[..., Any]] = {
    'to_i': to_i,
    'to_f': to_f,
    'to_s': to_s,
    'strip': strip,
    'upcase': upcase,
    'downcase': downcase,
    'capitalize': capitalize,
    'squish': squish,
    'numbers_only': numbers_only,
    'join': join,
    'default_if_blank': default_if_blank,
}


class MappingModifierProvider(ModifierProviderInterface):
    """Custom modifiers given as a mapping of name -> callable."""

    def __init__(self, modifiers: Mapping[str, Callable[..., Any]]):
        self._modifiers = dict(modifiers)

    def has_modifier(self, name: str) -> bool:
        return callable(self._modifiers.get(name))

    def invoke(self, name: str, values: Sequence[Any], params: Sequence[Any]) -> Any:
        if not self.has_modifier(name):
            raise UnknownModifier(name)
        return self._modifiers[name](*values, *params)


class ObjectModifierProvider(ModifierProviderInterface):
    """
    Custom modifiers exposed as methods of an arbitrary object.

    Only public callable members count; names starting with an underscore are
    never treated as modifiers.
    """

    def __init__(self, target: Any):
        self._target = target

    def has_modifier(self, name: str) -> bool:
        if name.startswith('_'):
            return False
        return callable(getattr(self._target, name, None))

    def invoke(self, name: str, values: Sequence[Any], params: Sequence[Any]) -> Any:
        if not self.has_modifier(name):
            raise UnknownModifier(name)
        return getattr(self._target, name)(*values, *params)


def as_modifier_provider(modifiers: Any) -> Optional[ModifierProviderInterface]:
    """Wrap a caller-supplied capability object in the matching provider."""
    if modifiers is None or isinstance(modifiers, ModifierProviderInterface):
        return modifiers
    if isinstance(modifiers, Mapping):
        return MappingModifierProvider(modifiers)
    return ObjectModifierProvider(modifiers)


class TransformRegistry:
    """
    Resolves modifier names to callables.

    Lookup order: built-in modifiers, then the capability object. The registry
    holds no per-call state, so one instance can serve any number of documents.
    """

    def __init__(self, modifiers: Any = None,
                 builtins: Optional[Mapping[str, Callable[..., Any]]] = None):
        """
        Args:
            modifiers: Capability object, mapping of name -> callable, or a
                       ModifierProviderInterface implementation
            builtins: Override for the built-in table (defaults to BUILTIN_MODIFIERS)
        """
        self.logger = logging.getLogger(__name__)
        self._builtins = dict(BUILTIN_MODIFIERS if builtins is None else builtins)
        self._provider = as_modifier_provider(modifiers)

    def has_modifier(self, name: str) -> bool:
        if name in self._builtins:
            return True
        return self._provider is not None and self._provider.has_modifier(name)

    def resolve(self, name: str) -> Callable[..., Any]:
        """
        Resolve a modifier name to a callable taking (value, *params).

        Raises:
            UnknownModifier: If neither the built-ins nor the capability object know the name
        """
        if name in self._builtins:
            return self._builtins[name]
        if self._provider is not None and self._provider.has_modifier(name):
            provider = self._provider
            return lambda *args: provider.invoke(name, args, ())
        raise UnknownModifier(name)

    def apply(self, ref: ModifierRef, *values: Any) -> Any:
        """
        Apply a modifier reference to one or more values.

        The values are passed first, the reference's params after them.

        Raises:
            UnknownModifier: If the modifier cannot be resolved
            DataTransformationError: If the modifier itself raises
        """
        func = self.resolve(ref.name)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Applying modifier '{ref.name}' to {values!r} with params {ref.params!r}")
        try:
            return func(*values, *ref.params)
        except Exception as e:
            source = values[0] if len(values) == 1 else list(values)
            self.logger.warning(f"Modifier '{ref.name}' failed on {source!r}: {e}")
            raise DataTransformationError(
                f"Modifier '{ref.name}' failed on value {source!r}: {e}",
                modifier_name=ref.name,
                source_value=source
            ) from e
