"""locale-sync – Sync Orchestrator.

One synchronization pass:
  1. load + validate the reference file (abort on anything unusable)
  2. load every configured target file (abort, or skip with skip_invalid_targets)
  3. per locale: reconcile → prune → save (normalized)
  4. save the normalized reference back

All state lives in the trees loaded for this pass; nothing survives between
runs except the files themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from pathlib import Path, PurePath
from typing import Optional

import structlog

from config.settings import Settings
from locale_sync.core.errors import (
    ReferenceFileError,
    TargetFileError,
    TreeFileError,
    TreeWriteError,
)
from locale_sync.core.storage import load_tree, save_tree
from locale_sync.core.tree import Tree, iter_leaf_paths, normalize
from locale_sync.integrations.translate import TranslationGateway
from locale_sync.sync.pruner import prune
from locale_sync.sync.reconciler import reconcile

logger = structlog.get_logger()


def derive_source_lang(reference_file: str | Path) -> str:
    """Source language from the reference path convention.

    'en/en.json' → 'en' (first segment). A bare file name uses its stem
    ('en.json' → 'en'); absolute or parent-relative paths use the name of the
    containing directory.
    """
    path = PurePath(reference_file)
    if path.is_absolute() or path.parts[0] == "..":
        return path.parent.name or path.stem
    if len(path.parts) > 1:
        return path.parts[0]
    return path.stem


@dataclass
class LocaleResult:
    locale: str
    path: Path
    added: bool = False
    removed: bool = False
    skipped: bool = False
    error: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.added or self.removed


@dataclass
class SyncReport:
    """Outcome of one pass."""
    reference_path: Path
    source_lang: str
    locales: list[LocaleResult] = field(default_factory=list)
    translated: int = 0
    translation_failures: int = 0

    @property
    def changed(self) -> bool:
        return any(result.changed for result in self.locales)

    @property
    def skipped(self) -> list[str]:
        return [result.locale for result in self.locales if result.skipped]


class SyncOrchestrator:
    """Drives a full synchronization pass over the configured locales."""

    def __init__(
        self,
        settings: Settings,
        gateway: Optional[TranslationGateway] = None,
    ) -> None:
        self._settings = settings
        self._gateway = gateway or TranslationGateway.from_settings(settings)
        self._base_dir = Path(settings.locales_dir)

    def _resolve(self, relative: str | Path) -> Path:
        return self._base_dir / relative

    def _load_reference(self, path: Path) -> Tree:
        try:
            tree = load_tree(path)
        except TreeFileError as e:
            raise ReferenceFileError(path, e.reason) from e
        if not tree:
            raise ReferenceFileError(path, "no keys")
        return tree

    def _load_targets(self, report: SyncReport) -> list[tuple[LocaleResult, Tree]]:
        loaded: list[tuple[LocaleResult, Tree]] = []

        for locale, relative in self._settings.target_locales.items():
            path = self._resolve(relative)
            try:
                tree = load_tree(path)
            except TreeFileError as e:
                if not self._settings.skip_invalid_targets:
                    raise TargetFileError(locale, path, e.reason) from e
                logger.warning("sync.locale_skipped", locale=locale, path=str(path), reason=e.reason)
                report.locales.append(
                    LocaleResult(locale=locale, path=path, skipped=True, error=e.reason)
                )
                continue
            loaded.append((LocaleResult(locale=locale, path=path), tree))

        return loaded

    def _sync_locale(self, reference: Tree, source_lang: str, result: LocaleResult, target: Tree) -> None:
        translate = partial(
            self._gateway.translate,
            source_lang=source_lang,
            target_lang=result.locale,
        )
        with structlog.contextvars.bound_contextvars(locale=result.locale):
            result.added = reconcile(
                reference,
                target,
                translate,
                max_workers=self._settings.translate_max_workers,
                repair_type_mismatches=self._settings.repair_type_mismatches,
            )
            result.removed = prune(reference, target)
            save_tree(result.path, target)

            if result.changed:
                logger.info(
                    "sync.locale_updated",
                    path=str(result.path),
                    added=result.added,
                    removed=result.removed,
                )
            else:
                logger.info("sync.locale_reordered", path=str(result.path))

    def run(self, reference_file: Optional[str] = None) -> SyncReport:
        """Run one synchronization pass.

        Args:
            reference_file: Reference path relative to locales_dir.
                Defaults to settings.reference_file.

        Returns:
            SyncReport describing what changed.

        Raises:
            ReferenceFileError: Reference missing, malformed or empty.
            TargetFileError: A target is missing or malformed and
                skip_invalid_targets is off. No file has been written.
            TreeWriteError: A locale or the reference could not be saved.
                Locales listed in the `sync.write_failed` log were written.
        """
        reference_file = reference_file or self._settings.reference_file
        reference_path = self._resolve(reference_file)

        reference = normalize(self._load_reference(reference_path))
        source_lang = self._settings.source_lang or derive_source_lang(reference_file)
        logger.info(
            "sync.started",
            reference=str(reference_path),
            source_lang=source_lang,
            reference_keys=sum(1 for _ in iter_leaf_paths(reference)),
            locales=list(self._settings.target_locales),
        )

        report = SyncReport(reference_path=reference_path, source_lang=source_lang)
        for result, target in self._load_targets(report):
            try:
                self._sync_locale(reference, source_lang, result, target)
            except TreeWriteError:
                logger.error(
                    "sync.write_failed",
                    locale=result.locale,
                    written=[r.locale for r in report.locales if not r.skipped],
                )
                raise
            report.locales.append(result)

        save_tree(reference_path, reference)

        stats = self._gateway.stats
        report.translated = stats.translated
        report.translation_failures = stats.failed
        logger.info(
            "sync.completed",
            changed=report.changed,
            skipped=report.skipped,
            translated=stats.translated,
            translation_failures=stats.failed,
        )
        return report
