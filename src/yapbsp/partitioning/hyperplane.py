## hyperplane and sub-hyperplane capabilities for yapBSP spaces
## Copyright (c) 2026 yapBSP contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Abstract capabilities of the spaces a BSP tree can partition.

A space plugs into the engine by providing a ``Hyperplane`` (a
codimension one oriented object with a signed offset), a
``SubHyperplane`` (a part of a hyperplane that can be split and
reunited) and, for the hyperplanes of dimension one or more, an
``Embedding`` between the space and the hyperplane's own sub-space.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = [
    "Side",
    "Hyperplane",
    "SubHyperplane",
    "SplitSubHyperplane",
    "Embedding",
    "Transform",
]


class Side(Enum):
    """Position of a sub-hyperplane or region with respect to a hyperplane."""
    PLUS = "plus"
    MINUS = "minus"
    BOTH = "both"
    HYPER = "hyper"


class Hyperplane(ABC):
    """An oriented hyperplane: the points with zero offset."""

    @abstractmethod
    def copy_self(self) -> "Hyperplane":
        ...

    @abstractmethod
    def get_offset(self, point) -> float:
        """signed offset of ``point``, positive on the plus side"""

    @abstractmethod
    def project(self, point):
        """point of the hyperplane closest to ``point``"""

    @property
    @abstractmethod
    def tolerance(self) -> float:
        ...

    @abstractmethod
    def same_orientation_as(self, other: "Hyperplane") -> bool:
        ...

    @abstractmethod
    def whole_hyperplane(self) -> "SubHyperplane":
        ...

    @abstractmethod
    def whole_space(self):
        """region covering the whole space the hyperplane lives in"""


@dataclass
class SplitSubHyperplane:
    """The two parts of a sub-hyperplane split by a hyperplane.

    Either part may be ``None`` when the sub-hyperplane lies entirely on
    one side.  Both are ``None`` for a sub-hyperplane lying in the
    splitting hyperplane.
    """
    plus: Optional["SubHyperplane"]
    minus: Optional["SubHyperplane"]

    @property
    def side(self) -> Side:
        plus = self.plus is not None and not self.plus.is_empty()
        minus = self.minus is not None and not self.minus.is_empty()
        if plus:
            return Side.BOTH if minus else Side.PLUS
        return Side.MINUS if minus else Side.HYPER


class SubHyperplane(ABC):
    """A part of a hyperplane."""

    @abstractmethod
    def copy_self(self) -> "SubHyperplane":
        ...

    @property
    @abstractmethod
    def hyperplane(self) -> Hyperplane:
        ...

    @abstractmethod
    def is_empty(self) -> bool:
        ...

    @property
    @abstractmethod
    def size(self) -> float:
        ...

    @abstractmethod
    def side(self, hyperplane: Hyperplane) -> Side:
        ...

    @abstractmethod
    def split(self, hyperplane: Hyperplane) -> SplitSubHyperplane:
        ...

    @abstractmethod
    def reunite(self, other: "SubHyperplane") -> "SubHyperplane":
        """union of two sub-hyperplanes lying in the same hyperplane"""


class Embedding(ABC):
    """Mapping between a space and the sub-space of one of its hyperplanes."""

    @abstractmethod
    def to_sub_space(self, point):
        ...

    @abstractmethod
    def to_space(self, point):
        ...


class Transform(ABC):
    """A transform applied to the points, hyperplanes and sub-hyperplanes
    of a space.

    ``apply_to_sub`` maps the sub-hyperplane lying in ``original`` onto
    ``transformed``, the already transformed image of ``original``.
    """

    @abstractmethod
    def apply_to_point(self, point):
        ...

    @abstractmethod
    def apply_to_hyperplane(self, hyperplane: Hyperplane) -> Hyperplane:
        ...

    @abstractmethod
    def apply_to_sub(self, sub: SubHyperplane, original: Hyperplane,
                     transformed: Hyperplane) -> SubHyperplane:
        ...
