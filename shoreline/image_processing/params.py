# -*- coding: utf-8 -*-
"""
Processor Parameters - Runtime-overridable settings declared on the class.

A processor lists the settings a caller may override per ``apply`` call as
``typing.Annotated`` class attributes. The annotation carries the allowed
values (``Range`` or ``Options``) and a short ``Desc``; the class attribute
carries the default::

    class GaussianFilter(ImageTransform):
        sigma: Annotated[float, Range(min=0.0, max=100.0),
                         Desc('Smoothing sigma in pixels')] = 0.2

``ImageProcessor.__init_subclass__`` turns these into a tuple of
``ParamSpec`` on ``cls.__param_specs__``; ``ImageProcessor._resolve_params``
checks each override against its spec before the tile is processed.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-03-03

Modified
--------
2026-03-14
"""

# Standard library
from typing import (
    Annotated,
    Any,
    List,
    NamedTuple,
    Optional,
    Tuple,
    get_origin,
    get_type_hints,
)


class ParamMeta:
    """Marker base; only ``Annotated`` metadata of this type is collected."""


class Range(ParamMeta):
    """Closed interval ``[min, max]``; either end may be left open as None."""

    __slots__ = ('min', 'max')

    def __init__(self, min: Optional[float] = None,
                 max: Optional[float] = None) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return f"Range(min={self.min!r}, max={self.max!r})"


class Options(ParamMeta):
    """Fixed set of accepted values."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options needs at least one accepted value")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class Desc(ParamMeta):
    """One-line description shown alongside the parameter."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


def _is_instance_of(value: Any, expected: type) -> bool:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) and expected is not bool:
        return False
    if expected is float:
        return isinstance(value, (int, float))
    return isinstance(value, expected)


class ParamSpec(NamedTuple):
    """Collected declaration of one overridable parameter.

    Attributes
    ----------
    name : str
        Attribute and keyword name.
    param_type : type
        First argument of the ``Annotated`` hint.
    default : Any
        Value of the class attribute.
    description : str
        ``Desc`` text, empty when none was given.
    min_value, max_value : float or None
        ``Range`` bounds.
    choices : tuple or None
        ``Options`` values.
    """

    name: str
    param_type: type
    default: Any
    description: str = ''
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    choices: Optional[Tuple[Any, ...]] = None

    def validate(self, value: Any) -> None:
        """Raise if *value* is not acceptable for this parameter.

        Raises
        ------
        TypeError
            Wrong type. ``int`` passes for ``float``; ``bool`` never
            passes for a number.
        ValueError
            Outside ``Range`` or not one of ``Options``.
        """
        if not _is_instance_of(value, self.param_type):
            raise TypeError(
                f"{self.name}: expected {self.param_type.__name__}, "
                f"received {type(value).__name__} ({value!r})"
            )
        if self.min_value is not None and value < self.min_value:
            raise ValueError(
                f"{self.name}={value!r} is below minimum {self.min_value!r}"
            )
        if self.max_value is not None and value > self.max_value:
            raise ValueError(
                f"{self.name}={value!r} is above maximum {self.max_value!r}"
            )
        if self.choices is not None and value not in self.choices:
            raise ValueError(
                f"{self.name}={value!r} is not one of the allowed "
                f"choices {list(self.choices)!r}"
            )


def _annotated_fields(cls: type) -> List[Tuple[str, Any]]:
    """``(name, hint)`` for every annotated attribute, base classes first."""
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return []
    fields: List[Tuple[str, Any]] = []
    for owner in reversed(cls.__mro__):
        for name in getattr(owner, '__annotations__', {}):
            if name in hints and all(name != n for n, _ in fields):
                fields.append((name, hints[name]))
    return fields


def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Build the ``ParamSpec`` tuple for a processor class.

    Raises
    ------
    TypeError
        If one attribute carries both ``Range`` and ``Options``.
    """
    specs = []
    for name, hint in _annotated_fields(cls):
        if get_origin(hint) is not Annotated:
            continue
        by_kind = {type(m): m for m in hint.__metadata__
                   if isinstance(m, ParamMeta)}
        if not by_kind:
            continue
        bounds = by_kind.get(Range)
        options = by_kind.get(Options)
        if bounds is not None and options is not None:
            raise TypeError(
                f"{cls.__qualname__}.{name} cannot declare both Range "
                f"and Options"
            )
        desc = by_kind.get(Desc)
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__origin__,
            default=getattr(cls, name, None),
            description=desc.text if desc is not None else '',
            min_value=bounds.min if bounds is not None else None,
            max_value=bounds.max if bounds is not None else None,
            choices=options.choices if options is not None else None,
        ))
    return tuple(specs)
