"""Translator - typed accessors for every user-facing string.

Each method maps domain values to a message id and an argument set, then
delegates to MessageResolver. Callers never build message ids or argument
dicts themselves.

Every method returns a string. A missing translation shows up as a
diagnostic sentinel (fluent-no-message=...) rather than an exception.

Python 3.13+.
"""

import os
import sys
from collections.abc import Iterable
from importlib.metadata import PackageNotFoundError, version
from typing import assert_never

from ludusavi_lang.constants import ENV_VARIANT, ENV_VERSION
from ludusavi_lang.domain import (
    CannotPrepareBackupTarget,
    CliBackupTargetExists,
    CliUnableToRequestConfirmation,
    CliUnrecognizedGames,
    ConfigInvalid,
    ErrorKind,
    ManifestCannotBeUpdated,
    ManifestInvalid,
    OperationStatus,
    OperationStepDecision,
    RegistryIssue,
    RestorationSourceInvalid,
    RootsConfig,
    SomeEntriesFailed,
    SortKey,
    Store,
    StrictPath,
    UnableToBrowseFileSystem,
    UnableToOpenDir,
    UnableToOpenUrl,
)
from ludusavi_lang.runtime.formatter import FormatArgs
from ludusavi_lang.runtime.resolver import MessageResolver
from ludusavi_lang.runtime.sizes import adjusted_size

__all__ = ["Translator"]

# Argument names shared with the catalog
PATH = "path"
PATH_ACTION = "path-action"
PROCESSED_GAMES = "processed-games"
PROCESSED_SIZE = "processed-size"
TOTAL_GAMES = "total-games"
TOTAL_SIZE = "total-size"

_DIST_NAME = "ludusavi-lang"
_DEV_VERSION = "0.0.0+dev"

_STORE_MESSAGES: dict[Store, str] = {
    Store.EPIC: "store-epic",
    Store.GOG: "store-gog",
    Store.GOG_GALAXY: "store-gog-galaxy",
    Store.MICROSOFT: "store-microsoft",
    Store.ORIGIN: "store-origin",
    Store.PRIME: "store-prime",
    Store.STEAM: "store-steam",
    Store.UPLAY: "store-uplay",
    Store.OTHER_HOME: "store-other-home",
    Store.OTHER_WINE: "store-other-wine",
    Store.OTHER: "store-other",
}

_SORT_KEY_MESSAGES: dict[SortKey, str] = {
    SortKey.NAME: "sort-name",
    SortKey.SIZE: "sort-size",
}


def _package_version() -> str:
    try:
        return version(_DIST_NAME)
    except PackageNotFoundError:
        return _DEV_VERSION


class Translator:
    """Typed facade over the message catalog.

    Args:
        resolver: Resolver to use; defaults to one over the shared registry

    Example:
        >>> translator = Translator()
        >>> translator.backup_button()
        'Back up'
    """

    __slots__ = ("_resolver",)

    def __init__(self, resolver: MessageResolver | None = None) -> None:
        self._resolver = resolver if resolver is not None else MessageResolver()

    @property
    def resolver(self) -> MessageResolver:
        return self._resolver

    def _translate(self, message_id: str, args: FormatArgs | None = None) -> str:
        return self._resolver.resolve(message_id, args)

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def window_title(self) -> str:
        """Application name, version and optional build variant.

        The version comes from LUDUSAVI_VERSION when set, otherwise from
        the installed package metadata.
        """
        name = self._translate("ludusavi")
        app_version = os.environ.get(ENV_VERSION) or _package_version()
        variant = os.environ.get(ENV_VARIANT)
        if variant:
            return f"{name} v{app_version} ({variant})"
        return f"{name} v{app_version}"

    def handle_error(self, error: ErrorKind) -> str:  # noqa: PLR0911 - one arm per error kind
        """Render any domain error.

        Every error kind has its own arm; there is no catch-all, so a new
        kind without a phrasing fails type checking at assert_never.
        """
        match error:
            case ConfigInvalid(why=why):
                return self.config_is_invalid(why)
            case ManifestInvalid(why=why):
                return self.manifest_is_invalid(why)
            case ManifestCannotBeUpdated():
                return self.manifest_cannot_be_updated()
            case CliBackupTargetExists(path=path):
                return self.cli_backup_target_exists(path)
            case CliUnrecognizedGames(games=games):
                return self.cli_unrecognized_games(games)
            case CliUnableToRequestConfirmation():
                return self.cli_unable_to_request_confirmation()
            case SomeEntriesFailed():
                return self.some_entries_failed()
            case CannotPrepareBackupTarget(path=path):
                return self.cannot_prepare_backup_target(path)
            case RestorationSourceInvalid(path=path):
                return self.restoration_source_is_invalid(path)
            case RegistryIssue():
                return self.registry_issue()
            case UnableToBrowseFileSystem():
                return self.unable_to_browse_file_system()
            case UnableToOpenDir(path=path):
                return self.unable_to_open_dir(path)
            case UnableToOpenUrl(url=url):
                return self.unable_to_open_url(url)
            case _:
                assert_never(error)

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------

    def cli_backup_target_exists(self, path: StrictPath) -> str:
        return self._translate("cli-backup-target-already-exists", {PATH: path.render()})

    def cli_unrecognized_games(self, games: Iterable[str]) -> str:
        prefix = self._translate("cli-unrecognized-games")
        lines = [f"  - {game}" for game in games]
        return f"{prefix}\n" + "\n".join(lines)

    def cli_confirm_restoration(self, path: StrictPath) -> str:
        return self._translate("cli-confirm-restoration", {PATH: path.render()})

    def cli_unable_to_request_confirmation(self) -> str:
        """Confirmation failure, with the winpty hint on Windows only.

        The note is empty elsewhere; the separating space is kept either way.
        """
        if sys.platform == "win32":
            extra_note = self._translate("cli-unable-to-request-confirmation.winpty-workaround")
        else:
            extra_note = ""
        return f"{self._translate('cli-unable-to-request-confirmation')} {extra_note}"

    def some_entries_failed(self) -> str:
        return self._translate("some-entries-failed")

    def cli_game_header(
        self,
        name: str,
        num_bytes: int,
        decision: OperationStepDecision,
        duplicated: bool,
    ) -> str:
        """Game heading line, e.g. "Game [1.5 KiB] [IGNORED]:"."""
        labels = []
        if decision == OperationStepDecision.IGNORED:
            labels.append(self.label_ignored())
        if duplicated:
            labels.append(self.label_duplicates())

        size = self.adjusted_size(num_bytes)
        if labels:
            return f"{name} [{size}] {' '.join(labels)}:"
        return f"{name} [{size}]:"

    def cli_game_line_item(
        self, item: str, successful: bool, ignored: bool, duplicated: bool
    ) -> str:
        parts = []
        if not successful:
            parts.append(self.label_failed())
        if ignored:
            parts.append(self.label_ignored())
        if duplicated:
            parts.append(self.label_duplicated())
        parts.append(item)
        return "  - " + " ".join(parts)

    def cli_game_line_item_redirected(self, item: str) -> str:
        return self._translate("cli-game-line-redirected-from", {PATH: item})

    def cli_summary(self, status: OperationStatus, location: StrictPath) -> str:
        args: FormatArgs = {
            PATH: location.render(),
            TOTAL_GAMES: status.total_games,
            PROCESSED_GAMES: status.processed_games,
            TOTAL_SIZE: self.adjusted_size(status.total_bytes),
            PROCESSED_SIZE: self.adjusted_size(status.processed_bytes),
        }
        if status.processed_all():
            return self._translate("cli-summary.succeeded", args)
        return self._translate("cli-summary.failed", args)

    # ------------------------------------------------------------------
    # Badges and labels
    # ------------------------------------------------------------------

    @staticmethod
    def _label(text: str) -> str:
        return f"[{text}]"

    def label_failed(self) -> str:
        return self._label(self.badge_failed())

    def label_duplicates(self) -> str:
        return self._label(self.badge_duplicates())

    def label_duplicated(self) -> str:
        return self._label(self.badge_duplicated())

    def label_ignored(self) -> str:
        return self._label(self.badge_ignored())

    def badge_failed(self) -> str:
        return self._translate("badge-failed")

    def badge_duplicates(self) -> str:
        return self._translate("badge-duplicates")

    def badge_duplicated(self) -> str:
        return self._translate("badge-duplicated")

    def badge_ignored(self) -> str:
        return self._translate("badge-ignored")

    def badge_redirected_from(self, original: StrictPath) -> str:
        return self._translate("badge-redirected-from", {PATH: original.render()})

    # ------------------------------------------------------------------
    # Buttons
    # ------------------------------------------------------------------

    def backup_button(self) -> str:
        return self._translate("button-backup")

    def preview_button(self) -> str:
        return self._translate("button-preview")

    def restore_button(self) -> str:
        return self._translate("button-restore")

    def nav_backup_button(self) -> str:
        return self._translate("button-nav-backup")

    def nav_restore_button(self) -> str:
        return self._translate("button-nav-restore")

    def nav_custom_games_button(self) -> str:
        return self._translate("button-nav-custom-games")

    def nav_other_button(self) -> str:
        return self._translate("button-nav-other")

    def add_root_button(self) -> str:
        return self._translate("button-add-root")

    def find_roots_button(self) -> str:
        return self._translate("button-find-roots")

    def add_redirect_button(self) -> str:
        return self._translate("button-add-redirect")

    def add_game_button(self) -> str:
        return self._translate("button-add-game")

    def continue_button(self) -> str:
        return self._translate("button-continue")

    def cancel_button(self) -> str:
        return self._translate("button-cancel")

    def cancelling_button(self) -> str:
        return self._translate("button-cancelling")

    def okay_button(self) -> str:
        return self._translate("button-okay")

    def select_all_button(self) -> str:
        return self._translate("button-select-all")

    def deselect_all_button(self) -> str:
        return self._translate("button-deselect-all")

    def enable_all_button(self) -> str:
        return self._translate("button-enable-all")

    def disable_all_button(self) -> str:
        return self._translate("button-disable-all")

    # ------------------------------------------------------------------
    # Roots
    # ------------------------------------------------------------------

    def no_roots_are_configured(self) -> str:
        return self._translate("no-roots-are-configured")

    def no_missing_roots(self) -> str:
        return self._translate("no-missing-roots")

    def confirm_add_missing_roots(self, roots: Iterable[RootsConfig]) -> str:
        """Prompt followed by one "[Store] path" line per root."""
        message = self._translate("confirm-add-missing-roots") + "\n"
        for root in roots:
            message += f"\n[{self.store(root.store)}] {root.path.render()}"
        return message

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def config_is_invalid(self, why: str) -> str:
        return f"{self._translate('config-is-invalid')}\n{why}"

    def manifest_is_invalid(self, why: str) -> str:
        return f"{self._translate('manifest-is-invalid')}\n{why}"

    def manifest_cannot_be_updated(self) -> str:
        return self._translate("manifest-cannot-be-updated")

    def cannot_prepare_backup_target(self, target: StrictPath) -> str:
        return self._translate("cannot-prepare-backup-target", {PATH: target.render()})

    def restoration_source_is_invalid(self, source: StrictPath) -> str:
        return self._translate("restoration-source-is-invalid", {PATH: source.render()})

    def registry_issue(self) -> str:
        return self._translate("registry-issue")

    def unable_to_browse_file_system(self) -> str:
        return self._translate("unable-to-browse-file-system")

    def unable_to_open_dir(self, path: StrictPath) -> str:
        return f"{self._translate('unable-to-open-directory')}\n\n{path.render()}"

    def unable_to_open_url(self, url: str) -> str:
        return f"{self._translate('unable-to-open-url')}\n\n{url}"

    # ------------------------------------------------------------------
    # Sizes and progress
    # ------------------------------------------------------------------

    def adjusted_size(self, num_bytes: int) -> str:
        return adjusted_size(num_bytes, self._resolver.registry.language.id)

    def processed_games(self, status: OperationStatus) -> str:
        args: FormatArgs = {
            TOTAL_GAMES: status.total_games,
            PROCESSED_GAMES: status.processed_games,
        }
        if status.processed_all_games():
            return self._translate("processed-games", args)
        return self._translate("processed-games-subset", args)

    def processed_bytes(self, status: OperationStatus) -> str:
        if status.processed_all_bytes():
            return self.adjusted_size(status.total_bytes)
        args: FormatArgs = {
            TOTAL_SIZE: self.adjusted_size(status.total_bytes),
            PROCESSED_SIZE: self.adjusted_size(status.processed_bytes),
        }
        return self._translate("processed-size-subset", args)

    def processed_subset(self, total: int, processed: int) -> str:
        """Processed-of-total phrasing for plain counts (not byte sizes)."""
        return self._translate(
            "processed-size-subset", {TOTAL_SIZE: total, PROCESSED_SIZE: processed}
        )

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def backup_target_label(self) -> str:
        return self._translate("field-backup-target")

    def backup_merge_label(self) -> str:
        return self._translate("toggle-backup-merge")

    def restore_source_label(self) -> str:
        return self._translate("field-restore-source")

    def custom_files_label(self) -> str:
        return self._translate("field-custom-files")

    def custom_registry_label(self) -> str:
        return self._translate("field-custom-registry")

    def search_label(self) -> str:
        return self._translate("field-search")

    def sort_label(self) -> str:
        return self._translate("field-sort")

    def ignored_items_label(self) -> str:
        return self._translate("field-backup-excluded-items")

    def full_retention(self) -> str:
        return self._translate("field-retention-full")

    def differential_retention(self) -> str:
        return self._translate("field-retention-differential")

    def redirect_source_placeholder(self) -> str:
        return self._translate("field-redirect-source.placeholder")

    def redirect_target_placeholder(self) -> str:
        return self._translate("field-redirect-target.placeholder")

    def custom_game_name_placeholder(self) -> str:
        return self._translate("field-custom-game-name.placeholder")

    def search_game_name_placeholder(self) -> str:
        return self._translate("field-search-game-name.placeholder")

    def explanation_for_exclude_other_os_data(self) -> str:
        return self._translate("explanation-for-exclude-other-os-data")

    def explanation_for_exclude_store_screenshots(self) -> str:
        return self._translate("explanation-for-exclude-store-screenshots")

    # ------------------------------------------------------------------
    # Enums
    # ------------------------------------------------------------------

    def store(self, store: Store) -> str:
        return self._translate(_STORE_MESSAGES[store])

    def sort_key(self, key: SortKey) -> str:
        return self._translate(_SORT_KEY_MESSAGES[key])

    def sort_reversed(self) -> str:
        return self._translate("sort-reversed")

    # ------------------------------------------------------------------
    # Modals
    # ------------------------------------------------------------------

    def modal_confirm_backup(self, target: StrictPath, target_exists: bool, merge: bool) -> str:
        """Backup confirmation: create, recreate or merge into the target."""
        if not target_exists:
            action = "create"
        elif not merge:
            action = "recreate"
        else:
            action = "merge"
        return self._translate("confirm-backup", {PATH: target.render(), PATH_ACTION: action})

    def modal_confirm_restore(self, source: StrictPath) -> str:
        return self._translate("confirm-restore", {PATH: source.render()})
