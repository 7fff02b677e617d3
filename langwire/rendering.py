"""Human-readable listings of compiled units, rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from langwire.types import CompiledUnit

DEFAULT_TEMPLATE = "unit.txt.j2"


class UnitRenderer:
    """Loads templates from ``templates_dir`` and renders compiled units."""

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        *,
        template_name: str = DEFAULT_TEMPLATE,
    ) -> None:
        if templates_dir is not None:
            base_dir = Path(templates_dir)
        else:
            base_dir = Path(__file__).parent / "templates"
        if not base_dir.exists():
            raise FileNotFoundError(
                f"Templates directory not found: {base_dir}"
            )
        self._base_dir = base_dir
        self._template_name = template_name
        self._env = Environment(
            loader=FileSystemLoader(str(base_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    @property
    def templates_dir(self) -> Path:
        return self._base_dir

    def render(self, unit: CompiledUnit, *, enabled: bool = False) -> str:
        template = self._get_template(self._template_name)
        return template.render(unit=unit.to_dict(), enabled=enabled)

    def _get_template(self, template_name: str) -> Template:
        try:
            return self._env.get_template(template_name)
        except Exception as exc:  # pragma: no cover - jinja handles specifics
            raise FileNotFoundError(
                f"Template '{template_name}' not found in {self.templates_dir}"
            ) from exc


__all__ = ["UnitRenderer"]
