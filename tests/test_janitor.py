from pathlib import Path

from xcforge.janitor import clean_workspace


def test_clean_keeps_only_the_bundle(tmp_path: Path) -> None:
    output = tmp_path / "build"
    bundle = output / "clashrs.xcframework"
    (bundle / "ios").mkdir(parents=True)
    (output / "aarch64-apple-ios").mkdir()
    (output / "aarch64-apple-ios" / "libclashrs.a").write_text("slice\n", encoding="utf-8")
    (output / "Headers" / "clashrs").mkdir(parents=True)
    (output / "notes.txt").write_text("scratch\n", encoding="utf-8")

    removed = clean_workspace(output, keep=bundle)

    assert [path.name for path in output.iterdir()] == ["clashrs.xcframework"]
    assert {path.name for path in removed} == {"Headers", "aarch64-apple-ios", "notes.txt"}
    assert (bundle / "ios").exists()


def test_clean_is_idempotent(tmp_path: Path) -> None:
    output = tmp_path / "build"
    bundle = output / "clashrs.xcframework"
    bundle.mkdir(parents=True)
    (output / "macos-universal").mkdir()

    clean_workspace(output, keep=bundle)
    second = clean_workspace(output, keep=bundle)

    assert second == ()
    assert [path.name for path in output.iterdir()] == ["clashrs.xcframework"]


def test_clean_missing_directory_is_noop(tmp_path: Path) -> None:
    assert clean_workspace(tmp_path / "absent", keep=tmp_path / "absent" / "x.xcframework") == ()
