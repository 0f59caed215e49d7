"""Translator tests against the bundled English catalog.

Every accessor must return real text: a sentinel in any output means the
catalog and the accessor disagree on a message id or attribute.
"""

import sys

import pytest

from ludusavi_lang.constants import ENV_VARIANT, ENV_VERSION, SENTINEL_PREFIXES
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
from ludusavi_lang.runtime import CatalogRegistry, MessageResolver
from ludusavi_lang.translator import Translator

PATH = StrictPath("/home/user/ludusavi-backup")
PREVIEW_HINT = 'If you\'re not sure, click "Preview" first.'


def _is_sentinel(text: str) -> bool:
    return text.startswith(SENTINEL_PREFIXES)


class TestCatalogCoverage:
    """Every bundled message renders real text."""

    def test_all_values_resolve(self, registry: CatalogRegistry, resolver: MessageResolver) -> None:
        catalog = registry.get_or_init()
        for message_id in sorted(catalog):
            message = catalog.get_message(message_id)
            assert message is not None
            if message.value is not None:
                assert not _is_sentinel(resolver.resolve(message_id)), message_id
            for attribute in message.attributes:
                full_id = f"{message_id}.{attribute}"
                assert not _is_sentinel(resolver.resolve(full_id)), full_id

    def test_default_translator_uses_shared_registry(self) -> None:
        assert Translator().backup_button() == "Back up"


class TestWindowTitle:
    """Version and variant come from the environment at call time."""

    def test_version_from_environment(
        self, translator: Translator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_VERSION, "0.24.0")
        monkeypatch.delenv(ENV_VARIANT, raising=False)
        assert translator.window_title() == "Ludusavi v0.24.0"

    def test_variant_appended(
        self, translator: Translator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_VERSION, "0.24.0")
        monkeypatch.setenv(ENV_VARIANT, "Flatpak")
        assert translator.window_title() == "Ludusavi v0.24.0 (Flatpak)"

    def test_package_version_fallback(
        self, translator: Translator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(ENV_VERSION, raising=False)
        monkeypatch.delenv(ENV_VARIANT, raising=False)
        title = translator.window_title()
        assert title.startswith("Ludusavi v")
        assert len(title) > len("Ludusavi v")


class TestCli:
    """Command-line phrasing."""

    def test_backup_target_exists(self, translator: Translator) -> None:
        assert translator.cli_backup_target_exists(PATH) == (
            "The backup target already exists ( /home/user/ludusavi-backup ). "
            "Either choose a different --path or delete it with --force."
        )

    def test_unrecognized_games(self, translator: Translator) -> None:
        assert translator.cli_unrecognized_games(["Celeste", "Hades"]) == (
            "No info for these games:\n  - Celeste\n  - Hades"
        )

    def test_confirm_restoration(self, translator: Translator) -> None:
        assert translator.cli_confirm_restoration(PATH) == (
            "Do you want to restore from /home/user/ludusavi-backup?"
        )

    def test_unable_to_request_confirmation(
        self, translator: Translator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(sys, "platform", "linux")
        assert translator.cli_unable_to_request_confirmation() == (
            "Unable to request confirmation. "
        )

    def test_unable_to_request_confirmation_windows(
        self, translator: Translator, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(sys, "platform", "win32")
        assert translator.cli_unable_to_request_confirmation() == (
            "Unable to request confirmation. If you are using a Bash emulator "
            "(like Git Bash), try running winpty."
        )

    def test_some_entries_failed_references_badge(self, translator: Translator) -> None:
        text = translator.some_entries_failed()
        assert "look for FAILED in the output" in text

    @pytest.mark.parametrize(
        ("decision", "duplicated", "expected"),
        [
            (OperationStepDecision.PROCESSED, False, "Celeste [1.5 KiB]:"),
            (OperationStepDecision.CANCELLED, False, "Celeste [1.5 KiB]:"),
            (OperationStepDecision.IGNORED, False, "Celeste [1.5 KiB] [IGNORED]:"),
            (OperationStepDecision.PROCESSED, True, "Celeste [1.5 KiB] [DUPLICATES]:"),
            (OperationStepDecision.IGNORED, True, "Celeste [1.5 KiB] [IGNORED] [DUPLICATES]:"),
        ],
    )
    def test_game_header(
        self,
        translator: Translator,
        decision: OperationStepDecision,
        duplicated: bool,
        expected: str,
    ) -> None:
        assert translator.cli_game_header("Celeste", 1536, decision, duplicated) == expected

    @pytest.mark.parametrize(
        ("successful", "ignored", "duplicated", "expected"),
        [
            (True, False, False, "  - save.dat"),
            (False, False, False, "  - [FAILED] save.dat"),
            (True, True, False, "  - [IGNORED] save.dat"),
            (False, True, True, "  - [FAILED] [IGNORED] [DUPLICATED] save.dat"),
        ],
    )
    def test_game_line_item(
        self,
        translator: Translator,
        successful: bool,
        ignored: bool,
        duplicated: bool,
        expected: str,
    ) -> None:
        assert translator.cli_game_line_item("save.dat", successful, ignored, duplicated) == expected

    def test_game_line_item_redirected(self, translator: Translator) -> None:
        assert translator.cli_game_line_item_redirected("/old") == "Redirected from: /old"

    def test_summary_succeeded(self, translator: Translator) -> None:
        status = OperationStatus(
            total_games=3, total_bytes=1536, processed_games=3, processed_bytes=1536
        )
        assert translator.cli_summary(status, PATH) == (
            "Overall:\n"
            "  Games: 3\n"
            "  Size: 1.5 KiB\n"
            "  Location: /home/user/ludusavi-backup"
        )

    def test_summary_failed(self, translator: Translator) -> None:
        status = OperationStatus(
            total_games=3, total_bytes=1536, processed_games=2, processed_bytes=1024
        )
        assert translator.cli_summary(status, PATH) == (
            "Overall:\n"
            "  Games: 2 of 3\n"
            "  Size: 1 KiB of 1.5 KiB\n"
            "  Location: /home/user/ludusavi-backup"
        )

    def test_summary_failed_when_only_bytes_differ(self, translator: Translator) -> None:
        status = OperationStatus(
            total_games=1, total_bytes=2048, processed_games=1, processed_bytes=1024
        )
        assert "Games: 1 of 1" in translator.cli_summary(status, PATH)


class TestLabels:
    """Badges and their bracketed label forms."""

    def test_badges(self, translator: Translator) -> None:
        assert translator.badge_failed() == "FAILED"
        assert translator.badge_duplicates() == "DUPLICATES"
        assert translator.badge_duplicated() == "DUPLICATED"
        assert translator.badge_ignored() == "IGNORED"

    def test_labels(self, translator: Translator) -> None:
        assert translator.label_failed() == "[FAILED]"
        assert translator.label_duplicates() == "[DUPLICATES]"
        assert translator.label_duplicated() == "[DUPLICATED]"
        assert translator.label_ignored() == "[IGNORED]"

    def test_redirected_from(self, translator: Translator) -> None:
        assert translator.badge_redirected_from(StrictPath("C:/Games")) == "FROM: C:/Games"


class TestSimpleAccessors:
    """Argument-free accessors map to their messages."""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("backup_button", "Back up"),
            ("preview_button", "Preview"),
            ("restore_button", "Restore"),
            ("nav_backup_button", "BACKUP MODE"),
            ("nav_restore_button", "RESTORE MODE"),
            ("nav_custom_games_button", "CUSTOM GAMES"),
            ("nav_other_button", "OTHER"),
            ("add_root_button", "Add root"),
            ("find_roots_button", "Find roots"),
            ("add_redirect_button", "Add redirect"),
            ("add_game_button", "Add game"),
            ("continue_button", "Continue"),
            ("cancel_button", "Cancel"),
            ("cancelling_button", "Cancelling..."),
            ("okay_button", "Okay"),
            ("select_all_button", "Select all"),
            ("deselect_all_button", "Deselect all"),
            ("enable_all_button", "Enable all"),
            ("disable_all_button", "Disable all"),
            ("no_roots_are_configured", "Add some roots to back up even more data."),
            ("no_missing_roots", "No additional roots found."),
            ("backup_target_label", "Back up to:"),
            ("backup_merge_label", "Merge"),
            ("restore_source_label", "Restore from:"),
            ("custom_files_label", "Paths:"),
            ("custom_registry_label", "Registry:"),
            ("search_label", "Search:"),
            ("sort_label", "Sort:"),
            ("ignored_items_label", "Backup exclusions:"),
            ("full_retention", "Full:"),
            ("differential_retention", "Differential:"),
            ("redirect_source_placeholder", "Source (original location)"),
            ("redirect_target_placeholder", "Target (new location)"),
            ("custom_game_name_placeholder", "Name"),
            ("search_game_name_placeholder", "Name"),
            ("sort_reversed", "Reversed"),
            ("registry_issue", "Error: Some registry entries were skipped."),
            ("unable_to_browse_file_system", "Error: Unable to browse on your system."),
        ],
    )
    def test_accessor(self, translator: Translator, method: str, expected: str) -> None:
        assert getattr(translator, method)() == expected

    def test_explanations_are_reflowed(self, translator: Translator) -> None:
        other_os = translator.explanation_for_exclude_other_os_data()
        screenshots = translator.explanation_for_exclude_store_screenshots()

        assert "\n" not in other_os
        assert "another operating system" in other_os
        assert "\n" not in screenshots
        assert "applies to Steam screenshots" in screenshots


class TestEnums:
    """Store and sort key names."""

    def test_every_store_has_a_name(self, translator: Translator) -> None:
        names = {store: translator.store(store) for store in Store}
        assert not any(_is_sentinel(name) for name in names.values())
        assert len(set(names.values())) == len(Store)

    @pytest.mark.parametrize(
        ("store", "expected"),
        [
            (Store.STEAM, "Steam"),
            (Store.GOG_GALAXY, "GOG Galaxy"),
            (Store.OTHER_HOME, "Home folder"),
            (Store.OTHER_WINE, "Wine prefix"),
        ],
    )
    def test_store_names(self, translator: Translator, store: Store, expected: str) -> None:
        assert translator.store(store) == expected

    def test_sort_keys(self, translator: Translator) -> None:
        assert translator.sort_key(SortKey.NAME) == "Name"
        assert translator.sort_key(SortKey.SIZE) == "Size"


class TestRoots:
    """Missing-root confirmation."""

    def test_confirm_add_missing_roots(self, translator: Translator) -> None:
        roots = [
            RootsConfig(StrictPath("C:/Program Files (x86)/Steam"), Store.STEAM),
            RootsConfig(StrictPath("~/.wine"), Store.OTHER_WINE),
        ]
        assert translator.confirm_add_missing_roots(roots) == (
            "Add these roots?\n"
            "\n[Steam] C:/Program Files (x86)/Steam"
            "\n[Wine prefix] ~/.wine"
        )

    def test_confirm_add_no_roots(self, translator: Translator) -> None:
        assert translator.confirm_add_missing_roots([]) == "Add these roots?\n"


class TestProgress:
    """Completeness selection for games and bytes."""

    @pytest.mark.parametrize(("count", "expected"), [(1, "1 game"), (5, "5 games")])
    def test_all_games_processed(self, translator: Translator, count: int, expected: str) -> None:
        status = OperationStatus(total_games=count, processed_games=count)
        assert translator.processed_games(status) == expected

    def test_games_subset(self, translator: Translator) -> None:
        status = OperationStatus(total_games=1500, processed_games=2)
        text = translator.processed_games(status)
        assert text == "2 of 1,500 games"

    def test_all_bytes_processed(self, translator: Translator) -> None:
        status = OperationStatus(total_bytes=1536, processed_bytes=1536)
        assert translator.processed_bytes(status) == "1.5 KiB"

    def test_bytes_subset(self, translator: Translator) -> None:
        status = OperationStatus(total_bytes=1536, processed_bytes=1024)
        text = translator.processed_bytes(status)
        assert text == "1 KiB of 1.5 KiB"
        assert translator.adjusted_size(1024) in text
        assert translator.adjusted_size(1536) in text

    def test_processed_subset(self, translator: Translator) -> None:
        assert translator.processed_subset(10, 4) == "4 of 10"

    def test_adjusted_size(self, translator: Translator) -> None:
        assert translator.adjusted_size(0) == "0 B"
        assert translator.adjusted_size(1023) == "1,023 B"
        assert translator.adjusted_size(1024) == "1 KiB"


class TestErrors:
    """Error phrasing, directly and through handle_error."""

    def test_config_is_invalid(self, translator: Translator) -> None:
        assert translator.config_is_invalid("missing field `roots`") == (
            "Error: The config file is invalid.\nmissing field `roots`"
        )

    def test_manifest_is_invalid(self, translator: Translator) -> None:
        assert translator.manifest_is_invalid("bad yaml") == (
            "Error: The manifest file is invalid.\nbad yaml"
        )

    def test_cannot_prepare_backup_target(self, translator: Translator) -> None:
        text = translator.cannot_prepare_backup_target(PATH)
        assert text.startswith("Error: Unable to prepare backup target")
        assert text.endswith(": /home/user/ludusavi-backup")

    def test_restoration_source_is_invalid(self, translator: Translator) -> None:
        text = translator.restoration_source_is_invalid(PATH)
        assert text.startswith("Error: The restoration source is invalid")
        assert text.endswith(": /home/user/ludusavi-backup")

    def test_unable_to_open_dir(self, translator: Translator) -> None:
        assert translator.unable_to_open_dir(PATH) == (
            "Error: Unable to open directory:\n\n/home/user/ludusavi-backup"
        )

    def test_unable_to_open_url(self, translator: Translator) -> None:
        assert translator.unable_to_open_url("https://example.com") == (
            "Error: Unable to open URL:\n\nhttps://example.com"
        )

    ALL_ERRORS: tuple[ErrorKind, ...] = (
        ConfigInvalid("why"),
        ManifestInvalid("why"),
        ManifestCannotBeUpdated(),
        CliBackupTargetExists(PATH),
        CliUnrecognizedGames(("Celeste",)),
        CliUnableToRequestConfirmation(),
        SomeEntriesFailed(),
        CannotPrepareBackupTarget(PATH),
        RestorationSourceInvalid(PATH),
        RegistryIssue(),
        UnableToBrowseFileSystem(),
        UnableToOpenDir(PATH),
        UnableToOpenUrl("https://example.com"),
    )

    @pytest.mark.parametrize("error", ALL_ERRORS, ids=lambda e: type(e).__name__)
    def test_handle_error_renders_text(self, translator: Translator, error: ErrorKind) -> None:
        text = translator.handle_error(error)
        assert text
        assert not _is_sentinel(text)
        assert "{$" not in text

    def test_handle_error_matches_direct_call(self, translator: Translator) -> None:
        assert translator.handle_error(UnableToOpenDir(PATH)) == translator.unable_to_open_dir(PATH)
        assert translator.handle_error(ConfigInvalid("x")) == translator.config_is_invalid("x")

    def test_error_kinds_distinct(self, translator: Translator) -> None:
        texts = [translator.handle_error(error) for error in self.ALL_ERRORS]
        assert len(set(texts)) == len(texts)


class TestModals:
    """Backup and restore confirmation dialogs."""

    @pytest.mark.parametrize(
        ("target_exists", "merge", "phrase"),
        [
            (False, False, "The target folder will be created:"),
            (False, True, "The target folder will be created:"),
            (True, False, "The target folder will be deleted and recreated from scratch:"),
            (True, True, "New save data will be merged into the target folder:"),
        ],
    )
    def test_confirm_backup(
        self, translator: Translator, target_exists: bool, merge: bool, phrase: str
    ) -> None:
        assert translator.modal_confirm_backup(PATH, target_exists, merge) == (
            f"Are you sure you want to proceed with the backup? {phrase}\n\n"
            f"/home/user/ludusavi-backup\n\n{PREVIEW_HINT}"
        )

    def test_confirm_backup_outputs_distinct(self, translator: Translator) -> None:
        outputs = {
            translator.modal_confirm_backup(PATH, exists, merge)
            for exists, merge in ((False, False), (True, False), (True, True))
        }
        assert len(outputs) == 3
        assert all(PATH.render() in text for text in outputs)

    def test_confirm_restore(self, translator: Translator) -> None:
        assert translator.modal_confirm_restore(PATH) == (
            "Are you sure you want to proceed with the restoration? "
            "This will overwrite any current files with the backups from here:\n\n"
            f"/home/user/ludusavi-backup\n\n{PREVIEW_HINT}"
        )
