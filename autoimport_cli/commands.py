"""The two import commands, composed from scanner, indexer, resolver and writer.

Every prompt is answered before the buffer is touched, so a cancelled
prompt leaves the buffer exactly as it was.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .buffer import Buffer
from .chooser import Chooser
from .config import Settings
from .indexer import PathLike, build_index, find_project_root, list_project_files
from .models import Cancelled, ChoiceResult, ImportOutcome, ModuleIndex
from .resolver import is_reserved_name, module_candidates, suggest_modules
from .scanner import identifier_at
from .writer import (
    from_import_line,
    insert_from_import,
    insert_qualified_import,
    qualified_import_line,
)

logger = logging.getLogger(__name__)

FileLister = Callable[[], Sequence[PathLike]]


def project_file_lister(
    reference_file: PathLike,
    settings: Optional[Settings] = None,
    root: Optional[PathLike] = None,
) -> FileLister:
    """Lister for the project that contains *reference_file*."""
    settings = settings or Settings()

    def _list() -> List[Path]:
        project_root = Path(root).resolve() if root else find_project_root(reference_file, settings.root_markers)
        logger.debug("Listing project files under %s", project_root)
        return list_project_files(project_root, settings.extensions, settings.skip_dirs)

    return _list


def build_project_index(buffer: Buffer, lister: FileLister) -> ModuleIndex:
    """Fresh index of the project, module names relative to the buffer's file."""
    return build_index(lister(), buffer.path.resolve())


def _reserved_warnings(name: str) -> List[str]:
    if not is_reserved_name(name):
        return []
    logger.warning("'%s' is a Python keyword or builtin", name)
    return [f"'{name}' is a Python keyword or builtin; importing it will shadow it"]


def _selected_text(choice: ChoiceResult) -> Optional[str]:
    if isinstance(choice, Cancelled):
        return None
    return choice.value.strip()


def perform_from_import(
    buffer: Buffer,
    chooser: Chooser,
    lister: Optional[FileLister] = None,
) -> ImportOutcome:
    """Import the identifier at point with ``from <module> import <name>``."""
    identifier = identifier_at(buffer.text, buffer.point, qualified=False)
    name = identifier.text
    warnings = _reserved_warnings(name)

    index = build_project_index(buffer, lister or project_file_lister(buffer.path))
    module = _selected_text(chooser(f"Import '{name}' from module", suggest_modules(name, index)))
    if not module:
        logger.debug("Import of '%s' cancelled", name)
        return ImportOutcome(status="cancelled", name=name, warnings=warnings)

    edit = insert_from_import(buffer, module, name)
    return ImportOutcome(
        status=edit.status,
        module=module,
        name=name,
        statement=from_import_line(module, name),
        warnings=warnings,
    )


def perform_qualified_import(
    buffer: Buffer,
    chooser: Chooser,
    lister: Optional[FileLister] = None,
) -> ImportOutcome:
    """Import the module for the identifier at point with ``import <module> [as <alias>]``.

    An unqualified identifier is rewritten to ``<alias or module>.<name>``.
    An identifier that is already qualified is left alone; its qualifier is
    offered first as the module and, when it has no dots, as the alias.
    """
    identifier = identifier_at(buffer.text, buffer.point, qualified=True)
    parts = identifier.parts
    name = parts[-1]
    prefix = ".".join(parts[:-1])
    alias_guess = prefix if prefix and "." not in prefix else ""
    warnings = _reserved_warnings(name)

    index = build_project_index(buffer, lister or project_file_lister(buffer.path))
    candidates = module_candidates(prefix, suggest_modules(name, index))

    module = _selected_text(chooser(f"Module providing '{name}'", candidates))
    if not module:
        logger.debug("Qualified import of '%s' cancelled", name)
        return ImportOutcome(status="cancelled", name=name, warnings=warnings)

    alias = _selected_text(
        chooser(
            f"Alias for {module} (empty for none)",
            [alias_guess] if alias_guess else [],
            default=alias_guess or None,
        )
    )
    if alias is None:
        logger.debug("Qualified import of '%s' cancelled at alias prompt", name)
        return ImportOutcome(status="cancelled", name=name, module=module, warnings=warnings)
    if alias == module:
        alias = ""

    buffer.goto(identifier.start)
    edit = insert_qualified_import(buffer, module, alias)

    qualified_usage = False
    if not identifier.is_qualified:
        # The point followed the identifier start through the import insertion
        buffer.insert(f"{alias or module}.")
        qualified_usage = True

    return ImportOutcome(
        status=edit.status,
        module=module,
        name=name,
        alias=alias,
        statement=qualified_import_line(module, alias),
        qualified_usage=qualified_usage,
        warnings=warnings,
    )
