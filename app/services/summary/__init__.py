"""
Package `app.services.summary`

Turns harvested facts about a software component into its canonical
definition: declared license, description and interesting files.

Public API:
- summarize(coordinate, facts, contributors=None, policy=None) -> dict
- add_license_from_files(result, facts, coordinate=None)
- add_interesting_files(result, facts)
- add_registry_data(result, facts, coordinate)
- add_crate_data / add_npm_data / add_nuget_data / add_pypi_data /
  add_gem_data / add_composer_data / add_maven_data / add_git_data

Modules:
- summary_utils: tolerant nested get/set and date extraction
- accumulator: folding of partial updates, precedence policies
- ecosystems: per package type policy table
- license_files, interesting_files, registry: the contributors
- summarizer: ordered execution of the contributors
"""

from .accumulator import FIRST_WRITER_WINS, LAST_WRITER_WINS, apply_update
from .interesting_files import add_interesting_files
from .license_files import add_license_from_files, is_license_file
from .registry import (
    add_composer_data,
    add_crate_data,
    add_gem_data,
    add_git_data,
    add_maven_data,
    add_npm_data,
    add_nuget_data,
    add_pypi_data,
    add_registry_data,
)
from .summarizer import CONTRIBUTORS, summarize

__all__ = [
    "CONTRIBUTORS",
    "FIRST_WRITER_WINS",
    "LAST_WRITER_WINS",
    "add_composer_data",
    "add_crate_data",
    "add_gem_data",
    "add_git_data",
    "add_interesting_files",
    "add_license_from_files",
    "add_maven_data",
    "add_npm_data",
    "add_nuget_data",
    "add_pypi_data",
    "add_registry_data",
    "apply_update",
    "is_license_file",
    "summarize",
]
