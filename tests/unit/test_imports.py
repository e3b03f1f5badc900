"""Every module in the package imports cleanly."""

import importlib
from pathlib import Path

import pytest

import permitrack

_PACKAGE_ROOT = Path(permitrack.__file__).parent


def _module_names() -> list[str]:
    names = []
    for path in sorted(_PACKAGE_ROOT.rglob("*.py")):
        parts = path.relative_to(_PACKAGE_ROOT.parent).with_suffix("").parts
        if parts[-1] == "__main__":
            continue
        if parts[-1] == "__init__":
            parts = parts[:-1]
        names.append(".".join(parts))
    return names


@pytest.mark.parametrize("name", _module_names())
def test_module_imports(name: str) -> None:
    importlib.import_module(name)


def test_date_fields_keep_their_annotations() -> None:
    from permitrack.application.dto.activity_dto import ActivityQuery
    from permitrack.application.dto.permit_dto import PermitFilter, PermitUpdateInput

    assert PermitFilter().date is None
    assert PermitUpdateInput().date is None
    assert ActivityQuery().date is None
