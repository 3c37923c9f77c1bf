"""Addon catalog: which files make up each addon.

The built-in catalog is described by catalog.yaml next to this module. Each
file entry names an asset under assets/ and a target path on the node.
Relative targets are placed under the configured addons directory.
"""

import logging
import posixpath
import threading
from dataclasses import dataclass
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from kindkit.utils.errors import AddonNotFoundError, ConfigurationError

logger = logging.getLogger(__name__)

_CATALOG_DIR = Path(__file__).parent
_DEFAULT_MANIFEST = _CATALOG_DIR / "catalog.yaml"
_ASSETS_DIR = _CATALOG_DIR / "assets"

DEFAULT_ADDONS_DIR = "/etc/kubernetes/addons"


@dataclass(frozen=True)
class AddonFile:
    """One file of an addon."""

    content: bytes
    target_path: str
    permissions: str = "0640"


@dataclass(frozen=True)
class Addon:
    """A named bundle of files placed on or removed from a node."""

    name: str
    files: tuple[AddonFile, ...]
    description: str = ""


class AddonFileSpec(BaseModel):
    """File entry in the catalog manifest."""

    asset: str
    target: str | None = None
    permissions: str = "0640"

    @field_validator("permissions")
    @classmethod
    def check_octal(cls, value: str) -> str:
        if not (3 <= len(value) <= 4 and all(c in "01234567" for c in value)):
            raise ValueError(f"permissions must be an octal mode, got {value!r}")
        return value


class AddonSpec(BaseModel):
    """Addon entry in the catalog manifest."""

    description: str = ""
    files: list[AddonFileSpec] = Field(min_length=1)


class CatalogManifest(BaseModel):
    """Top level of the catalog manifest."""

    addons: dict[str, AddonSpec]


class AddonCatalog:
    """Read-only lookup of addons by name.

    The manifest is loaded on first use.
    """

    def __init__(
        self,
        manifest_path: Path | None = None,
        assets_dir: Path | None = None,
        addons_dir: str = DEFAULT_ADDONS_DIR,
    ):
        """Initialize catalog.

        Args:
            manifest_path: Catalog YAML file; defaults to the built-in catalog
            assets_dir: Directory holding asset files; defaults to the manifest's
                assets/ directory
            addons_dir: Node directory for relative file targets
        """
        self.manifest_path = manifest_path or _DEFAULT_MANIFEST
        if assets_dir is None:
            assets_dir = _ASSETS_DIR if manifest_path is None else self.manifest_path.parent
        self.assets_dir = assets_dir
        self.addons_dir = addons_dir
        self._addons: dict[str, Addon] | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_addons(cls, addons: list[Addon]) -> "AddonCatalog":
        """Build a catalog from addons already in memory.

        Raises:
            ConfigurationError: If an addon has no files
        """
        for addon in addons:
            if not addon.files:
                raise ConfigurationError(f"Addon {addon.name} has no files")
        catalog = cls()
        catalog._addons = {addon.name: addon for addon in addons}
        return catalog

    def _load(self) -> dict[str, Addon]:
        """Load and cache the manifest.

        Raises:
            ConfigurationError: If the manifest or an asset cannot be read or is invalid
        """
        if self._addons is not None:
            return self._addons

        with self._lock:
            # Double-check after acquiring lock
            if self._addons is not None:
                return self._addons

            try:
                with open(self.manifest_path) as f:
                    raw = yaml.safe_load(f)
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot read addon catalog {self.manifest_path}: {e}"
                ) from e
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in addon catalog {self.manifest_path}: {e}"
                ) from e

            try:
                manifest = CatalogManifest.model_validate(raw)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid addon catalog {self.manifest_path}: {e}"
                ) from e

            addons = {
                name: Addon(
                    name=name,
                    files=tuple(self._build_file(name, f) for f in spec.files),
                    description=spec.description,
                )
                for name, spec in manifest.addons.items()
            }
            logger.debug(f"Loaded {len(addons)} addon(s) from {self.manifest_path}")
            self._addons = addons
            return addons

    def _build_file(self, addon_name: str, spec: AddonFileSpec) -> AddonFile:
        asset_path = self.assets_dir / spec.asset
        try:
            content = asset_path.read_bytes()
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read asset {spec.asset} for addon {addon_name}: {e}"
            ) from e

        target = spec.target or posixpath.basename(spec.asset)
        if not target.startswith("/"):
            target = posixpath.join(self.addons_dir, target)

        return AddonFile(content=content, target_path=target, permissions=spec.permissions)

    def get(self, name: str) -> Addon:
        """Look up an addon by name.

        Raises:
            AddonNotFoundError: If the addon is not in the catalog
        """
        addons = self._load()
        if name not in addons:
            available = ", ".join(sorted(addons))
            raise AddonNotFoundError(f"Unknown addon: '{name}'. Available addons: {available}")
        return addons[name]

    def names(self) -> list[str]:
        return sorted(self._load())

    def __contains__(self, name: object) -> bool:
        return name in self._load()
