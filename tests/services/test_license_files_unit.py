"""
test: services/summary/license_files.py

Test unitari per la dichiarazione della licenza a partire dai file di licenza.
Verificano il filtro sui nomi dei file, le posizioni ammesse per ogni ecosistema
(npm, nuget, maven, pypi), la combinazione AND delle licenze rilevate e l'assenza
di modifiche al risultato quando nessun file contribuisce.
"""

import pytest
from app.services.summary import license_files as lf

# ==================================================================================
#                           TEST: DICHIARAZIONE DA FILE
# ==================================================================================

def test_declares_mit_from_license_file():
    """Un singolo file LICENSE con licenza MIT dichiara MIT."""
    result = {}
    interesting_files = [{"path": "LICENSE", "token": "abcd", "license": "MIT"}]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files})
    assert result["licensed"]["declared"] == "MIT"


def test_declares_mit_from_package_folder_for_npm():
    """Per npm il contenuto del pacchetto è sotto 'package/': il file è ammesso."""
    result = {}
    interesting_files = [{"path": "package/LICENSE", "token": "abcd", "license": "MIT"}]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files}, {"type": "npm"})
    assert result["licensed"]["declared"] == "MIT"


def test_declares_nothing_from_package_folder_for_nuget():
    """Per nuget il pacchetto è piatto: 'package/LICENSE' non è la licenza del pacchetto."""
    result = {}
    interesting_files = [{"path": "package/LICENSE", "token": "abcd", "license": "MIT"}]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files}, {"type": "nuget"})
    assert "licensed" not in result


def test_declares_expression_from_multiple_license_files():
    """Licenze diverse da più file vengono combinate con AND nell'ordine di incontro."""
    result = {}
    interesting_files = [
        {"path": "LICENSE", "token": "abcd", "license": "MIT"},
        {"path": "LICENSE.html", "token": "abcd", "license": "0BSD"},
    ]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files})
    assert result["licensed"]["declared"] == "MIT AND 0BSD"


def test_declares_single_license_for_similar_license_files():
    """La stessa licenza dichiarata da due file produce un solo termine."""
    result = {}
    interesting_files = [
        {"path": "LICENSE", "token": "abcd", "license": "MIT"},
        {"path": "LICENSE.html", "token": "abcd", "license": "mit"},
    ]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files})
    assert result["licensed"]["declared"] == "MIT"


@pytest.mark.parametrize("file", [
    {"path": "not-A-License", "token": "abcd", "license": "MIT"},
    {"path": "LICENSE", "token": "abcd"},
    {"path": "LICENSE", "token": "abcd", "license": "NOASSERTION"},
    {"path": "LICENSE", "token": "abcd", "license": "Garbage"},
    {"token": "abcd", "license": "MIT"},
])
def test_declares_nothing_without_contributing_file(file):
    """
    File non di licenza, senza licenza, con NOASSERTION o con un token
    non riconosciuto non producono alcuna dichiarazione (chiave assente).
    """
    result = {}
    lf.add_license_from_files(result, {"interestingFiles": [file]})
    assert result == {}


@pytest.mark.parametrize("facts", [{}, {"interestingFiles": None}, {"interestingFiles": "LICENSE"}, None, [1, 2]])
def test_malformed_facts_leave_result_untouched(facts):
    """Fatti mancanti o di forma inattesa non sollevano eccezioni."""
    result = {"described": {"releaseDate": "2018-06-01"}}
    lf.add_license_from_files(result, facts)
    assert result == {"described": {"releaseDate": "2018-06-01"}}


def test_non_mapping_entries_are_skipped():
    result = {}
    interesting_files = [None, "LICENSE", {"path": "COPYING", "license": "Apache-2.0"}]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files})
    assert result == {"licensed": {"declared": "Apache-2.0"}}


def test_dual_license_file_is_kept_as_or_term():
    """Una licenza 'A/B' su un file diventa un termine OR tra parentesi nella congiunzione."""
    result = {}
    interesting_files = [
        {"path": "LICENSE", "license": "MIT/Apache-2.0"},
        {"path": "COPYING", "license": "0BSD"},
    ]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files})
    assert result["licensed"]["declared"] == "(MIT OR Apache-2.0) AND 0BSD"


def test_idempotent_on_fresh_results():
    facts = {"interestingFiles": [{"path": "LICENSE", "license": "MIT"}]}
    first, second = {}, {}
    lf.add_license_from_files(first, facts)
    lf.add_license_from_files(second, facts)
    assert first == second == {"licensed": {"declared": "MIT"}}

# ==================================================================================
#                           TEST: POSIZIONI PER ECOSISTEMA
# ==================================================================================

def test_is_license_file_without_coordinate_accepts_root_only():
    """Senza coordinata è ammessa solo la radice dell'albero."""
    assert lf.is_license_file("LICENSE") is True
    assert lf.is_license_file("Copying.txt") is True
    assert lf.is_license_file("docs/license.md") is False
    assert lf.is_license_file("README.md") is False
    assert lf.is_license_file(None) is False


@pytest.mark.parametrize("coordinate", [None, {"type": "crate"}])
def test_vendored_license_files_are_ignored(coordinate):
    """
    Un file di licenza di una dipendenza inclusa (node_modules/...) non entra
    nella licenza dichiarata, con o senza coordinata.
    """
    result = {}
    interesting_files = [
        {"path": "LICENSE", "license": "MIT"},
        {"path": "node_modules/dep/LICENSE", "license": "GPL-3.0-only"},
    ]
    lf.add_license_from_files(result, {"interestingFiles": interesting_files}, coordinate)
    assert result == {"licensed": {"declared": "MIT"}}


def test_is_license_file_with_coordinate_requires_root():
    """Con una coordinata, un file annidato fuori dalle posizioni ammesse è escluso."""
    assert lf.is_license_file("LICENSE", {"type": "nuget"}) is True
    assert lf.is_license_file("docs/LICENSE", {"type": "nuget"}) is False
    assert lf.is_license_file("LICENSE", {"type": "npm"}) is True


def test_is_license_file_maven_meta_inf():
    assert lf.is_license_file("META-INF/LICENSE", {"type": "maven"}) is True
    assert lf.is_license_file("meta-inf/license.txt", {"type": "maven"}) is True
    assert lf.is_license_file("META-INF/LICENSE", {"type": "npm"}) is False


def test_is_license_file_pypi_uses_name_and_revision():
    """Per pypi la cartella radice dipende da nome e revisione della coordinata."""
    coordinate = {"type": "pypi", "name": "requests", "revision": "2.19.1"}
    assert lf.is_license_file("requests-2.19.1/LICENSE", coordinate) is True
    assert lf.is_license_file("other-1.0/LICENSE", coordinate) is False
    # senza nome/revisione resta solo la radice
    assert lf.is_license_file("requests-2.19.1/LICENSE", {"type": "pypi"}) is False
    assert lf.is_license_file("LICENSE", {"type": "pypi"}) is True


def test_unknown_ecosystem_accepts_root_only():
    assert lf.is_license_file("LICENSE", {"type": "unknown-type"}) is True
    assert lf.is_license_file("package/LICENSE", {"type": "unknown-type"}) is False
