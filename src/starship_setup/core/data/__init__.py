"""
Bundled static resources: configuration variants and helper fragments.

The template files under ``templates/`` are third-party formats
(starship TOML, POSIX shell) and are written to disk byte-for-byte.
Variant metadata lives in ``variants.json``.

Usage::

    from starship_setup.core.data import get_catalog

    catalog = get_catalog()
    variant = catalog.variant("boxed")
    text = catalog.config_text("boxed")
"""

from __future__ import annotations

import json
from functools import cached_property, lru_cache
from pathlib import Path

from pydantic import BaseModel

_DATA_DIR = Path(__file__).parent
_TEMPLATES_DIR = _DATA_DIR / "templates"

DEFAULT_VARIANT = "boxed"

PROMPT_SCRIPT = "prompt.sh"
KUBECTL_SCRIPT = "kubectl.sh"


class Variant(BaseModel):
    """One selectable starship.toml template and its presentation metadata."""

    name: str
    description: str = ""
    summary: str = ""
    template: str
    preview: str | None = None
    bundles_font: bool = False


def read_template(filename: str) -> str:
    """Read a bundled template exactly as shipped."""
    path = _TEMPLATES_DIR / filename
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


class TemplateCatalog:
    """Registry of configuration variants.

    ``variants.json`` is read once on first access and cached for the
    lifetime of the catalog.
    """

    @cached_property
    def variants(self) -> dict[str, Variant]:
        with open(_DATA_DIR / "variants.json", encoding="utf-8") as f:
            raw = json.load(f)
        return {name: Variant(name=name, **spec) for name, spec in raw.items()}

    def names(self) -> list[str]:
        return sorted(self.variants)

    def variant(self, name: str) -> Variant:
        """Look up a variant; raises KeyError for unknown names."""
        try:
            return self.variants[name]
        except KeyError:
            raise KeyError(
                f"Unknown variant '{name}'. Available: {', '.join(self.names())}"
            ) from None

    def config_text(self, name: str) -> str:
        return read_template(self.variant(name).template)

    def preview_lines(self, name: str) -> list[str]:
        variant = self.variant(name)
        if not variant.preview:
            return []
        return read_template(variant.preview).splitlines()

    @cached_property
    def prompt_script(self) -> str:
        return read_template(PROMPT_SCRIPT)

    @cached_property
    def kubectl_script(self) -> str:
        return read_template(KUBECTL_SCRIPT)


@lru_cache(maxsize=1)
def get_catalog() -> TemplateCatalog:
    """Process-wide catalog instance."""
    return TemplateCatalog()
