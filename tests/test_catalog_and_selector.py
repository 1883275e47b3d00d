import pytest

from xcforge.catalog import CATALOG, known_platforms, targets_for, universal_dir_for
from xcforge.errors import HelpRequested, InvalidPlatform
from xcforge.selector import select_platforms


def test_catalog_lists_apple_platforms_in_lexicographic_order() -> None:
    assert known_platforms() == ("ios", "ios-sim", "macos")
    assert targets_for("ios") == ("aarch64-apple-ios",)
    assert targets_for("ios-sim") == ("x86_64-apple-ios", "aarch64-apple-ios-sim")
    assert targets_for("macos") == ("aarch64-apple-darwin", "x86_64-apple-darwin")


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        CATALOG["tvos"] = CATALOG["ios"]  # type: ignore[index]


def test_multi_arch_flags_and_universal_dirs() -> None:
    assert CATALOG["ios"].is_multi_arch is False
    assert CATALOG["ios-sim"].is_multi_arch is True
    assert universal_dir_for("ios-sim") == "ios-simulator-universal"
    assert universal_dir_for("macos") == "macos-universal"


def test_empty_selection_means_all_platforms() -> None:
    assert select_platforms([]) == known_platforms()


def test_selection_deduplicates_and_sorts() -> None:
    assert select_platforms(["macos", "ios", "macos", "ios"]) == ("ios", "macos")


def test_unknown_token_is_rejected_with_its_name() -> None:
    with pytest.raises(InvalidPlatform) as excinfo:
        select_platforms(["ios", "bogus"])

    assert "'bogus'" in str(excinfo.value)
    assert excinfo.value.code == "E_INVALID_PLATFORM"
    assert excinfo.value.context["platform"] == "bogus"


def test_targets_for_unknown_platform_raises() -> None:
    with pytest.raises(InvalidPlatform):
        targets_for("watchos")


@pytest.mark.parametrize("token", ["-h", "--help"])
def test_help_token_short_circuits(token: str) -> None:
    with pytest.raises(HelpRequested):
        select_platforms(["ios", token, "bogus"])


def test_first_offending_token_wins_over_later_help() -> None:
    with pytest.raises(InvalidPlatform):
        select_platforms(["bogus", "--help"])


def test_empty_string_tokens_are_ignored() -> None:
    assert select_platforms(["", "ios", ""]) == ("ios",)
    assert select_platforms([""]) == known_platforms()
