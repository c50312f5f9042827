# -*- coding: utf-8 -*-
"""
Processor Versioning - Class decorators for algorithm revision and category.

Every chain stage carries a ``__processor_version__``. ``Pipeline.provenance``
joins them into the ``processing_chain`` tag written on each classified
raster, so a product names the algorithm revisions that made it.
``@processor_tags`` records the stage's ``ProcessorCategory``.

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
import importlib.metadata
from typing import Callable, Optional, Type, TypeVar

# Shoreline internal
from shoreline.vocabulary import ProcessorCategory

T = TypeVar('T')


def _installed_version() -> str:
    try:
        return importlib.metadata.version('shoreline')
    except importlib.metadata.PackageNotFoundError:
        return 'unknown'


def processor_version(version: Optional[str] = None) -> Callable[[Type[T]], Type[T]]:
    """Set ``__processor_version__`` on the decorated class.

    Parameters
    ----------
    version : str, optional
        Algorithm revision, e.g. ``'1.0.0'``. Bump it whenever the stage's
        output changes for the same input. Defaults to the installed
        ``shoreline`` package version.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Invert(ImageTransform):
    ...     def apply(self, source, **kwargs):
    ...         return -source
    >>> Invert.__processor_version__
    '1.0.0'
    """
    def stamp(cls: Type[T]) -> Type[T]:
        cls.__processor_version__ = version or _installed_version()
        return cls
    return stamp


def processor_tags(
    category: Optional[ProcessorCategory] = None,
    description: Optional[str] = None,
) -> Callable[[Type[T]], Type[T]]:
    """Set ``__processor_tags__`` (category and description) on the class.

    Raises
    ------
    TypeError
        If *category* is given as anything other than a
        ``ProcessorCategory``. Raised when the decorator is built, so a bad
        category fails at import.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"processor_tags category must be a ProcessorCategory, "
            f"not {type(category).__name__} {category!r}"
        )

    def stamp(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {'category': category,
                                  'description': description}
        return cls
    return stamp
