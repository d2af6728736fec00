"""
Module `ecosystems` — per package type policies, expressed as data.

Each supported package type (the `type` of a coordinate) is described by an
`Ecosystem` entry of the `ECOSYSTEMS` table:

  - `license_locations`: directory prefixes where the package's own license
    file lives. The tree root ("") is always accepted. Prefixes are templates
    formatted with the coordinate fields, e.g. pypi sdists unpack under
    "{name}-{revision}/".
  - `registry_fields`: ordered `FieldRule`s mapping harvested registry or
    manifest fields onto the canonical result. When several rules share a
    target, the first one producing a value wins.

Adding an ecosystem means adding an entry here; the contributors in
`license_files` and `registry` never branch on the package type.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from app.services.spdx import join_expressions, normalize

from .summary_utils import extract_date, first_string, get_value, non_empty_string

# source of a FieldRule reading the whole coordinate instead of a fact
COORDINATE = "@coordinate"


@dataclass(frozen=True)
class FieldRule:
    """Maps one harvested value (dotted `source` path) onto a result `target` path."""

    target: str
    source: str
    transform: Callable[[Any], Any] = non_empty_string

    def extract(self, facts: Any, coordinate: Optional[Mapping[str, Any]] = None) -> Any:
        if self.source == COORDINATE:
            value = coordinate
        else:
            value = get_value(facts, self.source)
        if value is None:
            return None
        return self.transform(value)


@dataclass(frozen=True)
class Ecosystem:
    type: str
    license_locations: Tuple[str, ...] = ()
    registry_fields: Tuple[FieldRule, ...] = field(default_factory=tuple)


# ----------------------------- transforms -----------------------------------

def license_token(value: Any) -> Optional[str]:
    """A free-form license token, slash separated dual licenses included."""
    return normalize(value)


def license_object(value: Any) -> Optional[str]:
    """npm style license: a string, or a legacy {"type": ..., "url": ...} object."""
    if isinstance(value, Mapping):
        value = value.get("type")
    return normalize(value)


def license_alternatives(value: Any) -> Optional[str]:
    """
    A list of alternative licenses (gem, composer) as an OR disjunction.
    Every entry must normalize, otherwise nothing is declared.
    """
    if isinstance(value, str):
        return normalize(value)
    if not isinstance(value, (list, tuple)) or not value:
        return None
    normalized = [normalize(item) for item in value]
    if not all(normalized):
        return None
    return join_expressions(normalized, "OR")


# well-known license urls found in nuget's legacy licenseUrl field
_LICENSE_URLS = (
    (re.compile(r"^https?://(www\.)?opensource\.org/licenses/mit(-license)?(\.php|\.html)?/?$", re.I), "MIT"),
    (re.compile(r"^https?://(www\.)?apache\.org/licenses/license-2\.0(\.txt|\.html)?/?$", re.I), "Apache-2.0"),
    (re.compile(r"^https?://(www\.)?opensource\.org/licenses/apache-2\.0(\.php|\.html)?/?$", re.I), "Apache-2.0"),
    (re.compile(r"^https?://(www\.)?opensource\.org/licenses/bsd-3-clause(\.php|\.html)?/?$", re.I), "BSD-3-Clause"),
    (re.compile(r"^https?://(www\.)?opensource\.org/licenses/bsd-2-clause(\.php|\.html)?/?$", re.I), "BSD-2-Clause"),
    (re.compile(r"^https?://(www\.)?opensource\.org/licenses/ms-pl(\.php|\.html)?/?$", re.I), "MS-PL"),
    (re.compile(r"^https?://(www\.)?gnu\.org/licenses/gpl-3\.0(\.txt|\.html|\.en\.html)?/?$", re.I), "GPL-3.0-only"),
    (re.compile(r"^https?://(www\.)?gnu\.org/licenses/lgpl-3\.0(\.txt|\.html|\.en\.html)?/?$", re.I), "LGPL-3.0-only"),
    (re.compile(r"^https?://(www\.)?mozilla\.org/(en-us/)?mpl/2\.0/?$", re.I), "MPL-2.0"),
)


def license_url(value: Any) -> Optional[str]:
    """The SPDX identifier behind a well-known license url, or None."""
    url = non_empty_string(value)
    if not url:
        return None
    url = url.strip()
    for pattern, identifier in _LICENSE_URLS:
        if pattern.match(url):
            return identifier
    return None


def issue_tracker(value: Any) -> Optional[str]:
    """npm `bugs`: an http(s) string, or an object carrying `url` or `email`."""
    if isinstance(value, Mapping):
        return non_empty_string(value.get("url")) or non_empty_string(value.get("email"))
    url = non_empty_string(value)
    if url and url.startswith("http"):
        return url
    return None


def _coordinate_part(coordinate: Any, key: str) -> Optional[str]:
    if not isinstance(coordinate, Mapping):
        return None
    value = coordinate.get(key)
    if isinstance(value, str) and value.strip() and value != "-":
        return value.strip()
    return None


def crate_registry_url(coordinate: Any) -> Optional[str]:
    name = _coordinate_part(coordinate, "name")
    return f"https://crates.io/crates/{name}" if name else None


def crate_version_url(coordinate: Any) -> Optional[str]:
    registry = crate_registry_url(coordinate)
    revision = _coordinate_part(coordinate, "revision")
    return f"{registry}/{revision}" if registry and revision else None


def crate_download_url(coordinate: Any) -> Optional[str]:
    name = _coordinate_part(coordinate, "name")
    revision = _coordinate_part(coordinate, "revision")
    if not (name and revision):
        return None
    return f"https://crates.io/api/v1/crates/{name}/{revision}/download"


# ------------------------------- table --------------------------------------

_RELEASE_DATE = FieldRule("described.releaseDate", "releaseDate", extract_date)

ECOSYSTEMS: Dict[str, Ecosystem] = {
    "crate": Ecosystem(
        type="crate",
        registry_fields=(
            FieldRule("licensed.declared", "registryData.license", license_token),
            FieldRule("described.projectWebsite", "manifest.homepage", non_empty_string),
            FieldRule("described.releaseDate", "registryData.created_at", extract_date),
            FieldRule("described.urls.registry", COORDINATE, crate_registry_url),
            FieldRule("described.urls.version", COORDINATE, crate_version_url),
            FieldRule("described.urls.download", COORDINATE, crate_download_url),
        ),
    ),
    "npm": Ecosystem(
        type="npm",
        license_locations=("package/",),
        registry_fields=(
            FieldRule("described.releaseDate", "registryData.releaseDate", extract_date),
            FieldRule("described.projectWebsite", "registryData.manifest.homepage", first_string),
            FieldRule("described.issueTracker", "registryData.manifest.bugs", issue_tracker),
            FieldRule("licensed.declared", "registryData.manifest.license", license_object),
        ),
    ),
    "nuget": Ecosystem(
        type="nuget",
        registry_fields=(
            _RELEASE_DATE,
            FieldRule("described.projectWebsite", "manifest.projectUrl", non_empty_string),
            FieldRule("licensed.declared", "manifest.licenseExpression", license_token),
            FieldRule("licensed.declared", "manifest.licenseUrl", license_url),
        ),
    ),
    "pypi": Ecosystem(
        type="pypi",
        license_locations=("{name}-{revision}/",),
        registry_fields=(
            _RELEASE_DATE,
            FieldRule("described.projectWebsite", "registryData.info.home_page", non_empty_string),
            FieldRule("licensed.declared", "declaredLicense", license_token),
        ),
    ),
    "gem": Ecosystem(
        type="gem",
        registry_fields=(
            _RELEASE_DATE,
            FieldRule("described.projectWebsite", "registryData.homepage_uri", non_empty_string),
            FieldRule("licensed.declared", "registryData.licenses", license_alternatives),
        ),
    ),
    "composer": Ecosystem(
        type="composer",
        registry_fields=(
            _RELEASE_DATE,
            FieldRule("described.projectWebsite", "registryData.manifest.homepage", non_empty_string),
            FieldRule("licensed.declared", "registryData.manifest.license", license_alternatives),
        ),
    ),
    "maven": Ecosystem(
        type="maven",
        license_locations=("META-INF/",),
        registry_fields=(_RELEASE_DATE,),
    ),
    "sourcearchive": Ecosystem(
        type="sourcearchive",
        license_locations=("META-INF/",),
        registry_fields=(_RELEASE_DATE,),
    ),
    "git": Ecosystem(type="git", registry_fields=(_RELEASE_DATE,)),
    "github": Ecosystem(
        type="github",
        registry_fields=(
            _RELEASE_DATE,
            FieldRule("described.projectWebsite", "registryData.homepage", non_empty_string),
            FieldRule("licensed.declared", "registryData.license.spdx_id", license_token),
        ),
    ),
}


def coordinate_type(coordinate: Any) -> Optional[str]:
    if not isinstance(coordinate, Mapping):
        return None
    value = coordinate.get("type")
    return value.strip().lower() if isinstance(value, str) and value.strip() else None


def get_ecosystem(coordinate: Any) -> Optional[Ecosystem]:
    """The policy entry for the coordinate's package type, None when unknown."""
    return ECOSYSTEMS.get(coordinate_type(coordinate) or "")


def license_locations(coordinate: Any) -> Tuple[str, ...]:
    """
    Directory prefixes where the package's own license file may sit for this
    coordinate, the tree root included. Templates whose fields are missing
    from the coordinate are skipped.
    """
    ecosystem = get_ecosystem(coordinate)
    fields = {}
    if ecosystem:
        fields = {key: value for key, value in coordinate.items() if isinstance(value, str) and value}
    prefixes = []
    for template in ecosystem.license_locations if ecosystem else ():
        try:
            prefix = template.format(**fields)
        except (KeyError, IndexError, ValueError):
            continue
        if prefix not in prefixes:
            prefixes.append(prefix)
    prefixes.append("")
    return tuple(prefixes)
