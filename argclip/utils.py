"""
Argclip internal helpers.

- Unset: "not given" marker for parameters where None is a real value (a
  declaration default of None still makes the declaration optional).
- coalesce(value, default): swap Unset for a default, keep every other value.
- rename(name): decorator fixing __name__/__qualname__ of generated methods.
- mirror(name): read-only property over self._<name>, detaching containers.
- progname(path): program name of an argv[0]-like path.
"""
import functools
import re
from collections.abc import Sequence, Mapping, Set
from types import GenericAlias
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    One instance per process, always false, shown as "Unset". It can take part
    in isinstance unions (str | Unset) and cannot be subclassed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return UnsetType, ()

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return default when object is Unset, object otherwise (None, 0 and "" included).
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator giving a generated function a stable name for tracebacks and reprs.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def wrapper(function):
        if not callable(function):
            raise TypeError("rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return wrapper


def _detach(object):
    # types (list[int] included) are shared, containers are copied all the way down
    if isinstance(object, type | GenericAlias):
        return object
    if isinstance(object, Mapping):
        return {key: _detach(value) for key, value in object.items()}
    if isinstance(object, Set):
        return {_detach(item) for item in object}
    if isinstance(object, Sequence) and not isinstance(object, str | bytes):
        return [_detach(item) for item in object]
    return object


def mirror(name, /):
    """
    Read-only property named `name` over the attribute "_" + name.

    Containers come back as fresh copies, so callers cannot reach into a
    declaration's default through it.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


def progname(path, /):
    r"""
    Last component of an argv[0]-like path.

    '/' and '\' both separate components whatever the host platform, so
    "C:\tools\app.exe" gives "app.exe" and "/usr/bin/app" gives "app".
    """
    if not isinstance(path, str):
        raise TypeError("progname() argument must be a string")
    return re.split(r"[\\/]", path)[-1]


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "progname",
    "UnsetType",
    "Unset",
)
