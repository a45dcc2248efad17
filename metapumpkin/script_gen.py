"""
Script generator that can either emit or evaluate geometry and graphics code.

Generated scripts are divided into three sections:
  geometry - computes the arrays to draw
  graphics - creates the matplotlib artists
  color    - computes and applies the colormap

This lets a caller run only the geometry section to get arrays without
creating graphics, or run (or print) the whole script to draw directly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
from jinja2 import Environment, StrictUndefined

from .colormap import ColormapFragments, ColormapSpec, normalize_colormap
from .config import SCRIPT_IMPORTS
from .errors import Err, PumpkinError
from .literals import to_literal

logger = logging.getLogger(__name__)

_JINJA = Environment(undefined=StrictUndefined, keep_trailing_newline=True)

_SCRIPT_TEMPLATE = _JINJA.from_string(
    "{{ geometry }}\n"
    "\n"
    "{{ graphics }}\n"
    "\n"
    "{% if colormap_values %}{{ colormap_values }}\n{% endif %}"
    "{{ colormap_apply }}\n"
)


class Section(Enum):
    GEOMETRY = "geometry"
    GRAPHICS = "graphics"
    COLOR = "color"


_SECTION_ORDER = [Section.GEOMETRY, Section.GRAPHICS, Section.COLOR]


@dataclass
class Constant:
    """A named value declared in a generated script."""

    name: str
    value: Any


class ScriptGen:
    """Accumulates script lines and named constants for one generation run."""

    def __init__(
        self,
        header: Optional[str] = None,
        constant_folding: bool = False,
        imports: Optional[Sequence[str]] = None,
    ):
        """Create a generator positioned at the geometry section.

        Args:
            header: Optional comment placed at the top of the script
            constant_folding: Inline constant values instead of declaring variables
            imports: Import lines the script needs, defaults to SCRIPT_IMPORTS
        """
        self.constant_folding = constant_folding
        self.imports = list(SCRIPT_IMPORTS if imports is None else imports)
        self.section = Section.GEOMETRY
        self.constants: List[Constant] = []
        self._lines: Dict[Section, List[str]] = {Section.GEOMETRY: [], Section.GRAPHICS: []}
        self._colormap: Optional[ColormapFragments] = None

        if header:
            self._lines[Section.GEOMETRY].append(f"# {header}")
        self._lines[Section.GEOMETRY].extend(self.imports)

    @property
    def geometry_lines(self) -> List[str]:
        return list(self._lines[Section.GEOMETRY])

    @property
    def graphics_lines(self) -> List[str]:
        return list(self._lines[Section.GRAPHICS])

    @property
    def colormap_fragments(self) -> Optional[ColormapFragments]:
        return self._colormap

    def next_section(self) -> None:
        """Switch to the next section of the script."""
        idx = _SECTION_ORDER.index(self.section)
        if idx + 1 >= len(_SECTION_ORDER):
            raise PumpkinError(Err.SEQUENCE, {"section": self.section.value, "reason": "no next section"})
        self.section = _SECTION_ORDER[idx + 1]
        logger.debug(f"Script generation moved to {self.section.value} section")

    def add_lines(self, lines: Union[str, Sequence[str]]) -> None:
        """Add lines of code to the current section."""
        if self.section is Section.COLOR:
            raise PumpkinError(
                Err.SEQUENCE,
                {"section": self.section.value, "reason": "use colormap() for the color section"},
            )
        if isinstance(lines, str):
            lines = [lines]
        self._lines[self.section].extend(lines)

    def add_comment(self, text: str, header: bool = False) -> None:
        """Add a comment to the current section.

        Header comments start a ``# %%`` cell, separated from preceding code
        by a blank line. Comments are dropped when constant folding is on.
        """
        if self.constant_folding:
            return
        if header:
            if self._lines.get(self.section):
                self.add_lines("")
            self.add_lines(f"# %% {text}")
        else:
            self.add_lines(f"# {text}")

    def constant(self, name: str, value: Any, comment: Optional[str] = None) -> None:
        """Declare a constant.

        With constant folding off a declaration line is added to the script.
        With constant folding on nothing is added, the value is only remembered
        so ref() can inline it.
        """
        if not self.constant_folding:
            line = f"{name} = {to_literal(value)}"
            if comment:
                line += f"  # {comment}"
            self.add_lines(line)
        self.constants.append(Constant(name=name, value=value))
        logger.debug(f"Declared constant {name}={value!r}")

    def ref(self, name: str, index: Optional[int] = None) -> str:
        """Return script text referencing the constant NAME.

        Args:
            name: Name of a declared constant
            index: Optional element of a vector constant to reference

        Returns:
            The variable name (subscripted when index is given), or with
            constant folding on the literal value

        Raises:
            PumpkinError: ENCODING when folding an index into a scalar constant
                or past the end of a vector constant
        """
        if self.constant_folding:
            value = self.lookup(name).value
            if index is not None:
                array = np.asarray(value)
                if array.ndim != 1 or not -array.size <= index < array.size:
                    raise PumpkinError(
                        Err.ENCODING,
                        {"name": name, "index": index, "reason": "index is outside the stored vector"},
                    )
                value = array[index]
            return to_literal(value)
        if index is not None:
            return f"{name}[{index}]"
        return name

    def lookup(self, name: str) -> Constant:
        """Return the most recently declared constant called NAME."""
        for constant in reversed(self.constants):
            if constant.name == name:
                return constant
        raise PumpkinError(Err.UNKNOWN_CONSTANT, {"name": name})

    def colormap(self, spec: ColormapSpec, size: int) -> None:
        """Set the colormap, either a palette name or a pair of colors."""
        self._colormap = normalize_colormap(spec, size)

    def _require_colormap(self) -> ColormapFragments:
        if self._colormap is None:
            raise PumpkinError(Err.SEQUENCE, {"reason": "colormap has not been set"})
        return self._colormap

    @staticmethod
    def _run(lines: Sequence[str], namespace: Dict[str, Any], label: str) -> None:
        code = compile("\n".join(lines), f"<metapumpkin-{label}>", "exec")
        exec(code, namespace)

    def _fresh_namespace(self) -> Dict[str, Any]:
        namespace: Dict[str, Any] = {"__name__": "__metapumpkin__"}
        self._run(self.imports, namespace, "imports")
        return namespace

    def evaluate_geometry(self) -> Dict[str, Any]:
        """Run only the geometry section and return the resulting namespace."""
        namespace: Dict[str, Any] = {"__name__": "__metapumpkin__"}
        self._run(self._lines[Section.GEOMETRY], namespace, "geometry")
        return namespace

    def evaluate(self, namespace: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run the whole script and return the namespace it ran in."""
        fragments = self._require_colormap()
        if namespace is None:
            namespace = {"__name__": "__metapumpkin__"}
        self._run(self._lines[Section.GEOMETRY], namespace, "geometry")
        self._run(self._lines[Section.GRAPHICS], namespace, "graphics")
        if not fragments.named:
            self._run(fragments.values, namespace, "colormap-values")
        self._run(fragments.apply, namespace, "colormap")
        return namespace

    def generate_script(self) -> str:
        """Return the generated script."""
        fragments = self._require_colormap()
        return _SCRIPT_TEMPLATE.render(
            geometry="\n".join(self._lines[Section.GEOMETRY]),
            graphics="\n".join(self._lines[Section.GRAPHICS]),
            colormap_values="" if fragments.named else "\n".join(fragments.values),
            colormap_apply="\n".join(fragments.apply),
        )

    def generate_map(self) -> np.ndarray:
        """Evaluate the colormap value fragment and return the color table."""
        fragments = self._require_colormap()
        namespace = self._fresh_namespace()
        self._run(fragments.values, namespace, "colormap-values")
        return np.asarray(namespace["cmap"], dtype=float)
