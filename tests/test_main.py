"""Tests for the command-line entrypoint."""

import asyncio

import pytest

from catalog_studio.config import Settings
from catalog_studio.containers import build_container
from catalog_studio.domain.errors import PreconditionError, RemoteCallError
from catalog_studio.main import build_parser, list_images, main, run
from tests.conftest import PNG_HEADER, FakeImageClient


def _write_images(directory, *names: str) -> None:
    directory.mkdir()
    for name in names:
        (directory / name).write_bytes(PNG_HEADER + name.encode())


def test_list_images_filters_and_sorts(tmp_path) -> None:
    _write_images(tmp_path / "in", "b.png", "a.jpg", "notes.txt")

    assert [p.name for p in list_images(tmp_path / "in")] == ["a.jpg", "b.png"]


def test_run_writes_exports_for_each_target(tmp_path, container, capsys) -> None:
    _write_images(tmp_path / "scenes", "studio.png")
    _write_images(tmp_path / "targets", "blue.png", "red.png")

    code = asyncio.run(
        run(container, tmp_path / "scenes", tmp_path / "targets", tmp_path / "out")
    )

    assert code == 0
    assert sorted(p.name for p in (tmp_path / "out" / "02-red").iterdir()) == [
        f"red-shot-{n}.png" for n in range(1, 5)
    ]
    assert "blue: completed, 4 shot(s)" in capsys.readouterr().out


def test_run_reports_failed_targets(tmp_path, container, fake_client, capsys) -> None:
    fake_client.outcomes = [RemoteCallError("rate limited")]
    _write_images(tmp_path / "scenes", "studio.png")
    _write_images(tmp_path / "targets", "blue.png", "red.png")

    code = asyncio.run(
        run(container, tmp_path / "scenes", tmp_path / "targets", tmp_path / "out")
    )

    assert code == 1
    assert not (tmp_path / "out" / "01-blue").exists()
    assert (tmp_path / "out" / "02-red").is_dir()
    assert "blue: error (rate limited)" in capsys.readouterr().out


def test_run_with_empty_folder_does_nothing(tmp_path, container, fake_client) -> None:
    _write_images(tmp_path / "scenes")
    _write_images(tmp_path / "targets", "blue.png")

    code = asyncio.run(
        run(container, tmp_path / "scenes", tmp_path / "targets", tmp_path / "out")
    )

    assert code == 1
    assert fake_client.requests == []


def test_run_without_credential_raises(tmp_path) -> None:
    container = build_container(
        Settings(_env_file=None, gemini_api_key=None),
        client_factory=lambda key: FakeImageClient(),
    )
    _write_images(tmp_path / "scenes", "studio.png")
    _write_images(tmp_path / "targets", "blue.png")

    with pytest.raises(PreconditionError):
        asyncio.run(
            run(container, tmp_path / "scenes", tmp_path / "targets", tmp_path / "out")
        )


def test_parser_requires_all_folders() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--scenes", "s"])


def test_run_keeps_targets_with_the_same_stem_apart(tmp_path, container) -> None:
    _write_images(tmp_path / "scenes", "studio.png")
    _write_images(tmp_path / "targets", "shirt.jpg", "shirt.png")

    code = asyncio.run(
        run(container, tmp_path / "scenes", tmp_path / "targets", tmp_path / "out")
    )

    assert code == 0
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == [
        "01-shirt",
        "02-shirt",
    ]
    written = sorted((tmp_path / "out").glob("*/*.png"))
    assert len(written) == 8


def test_main_rejects_missing_folders(tmp_path, capsys) -> None:
    _write_images(tmp_path / "targets", "blue.png")

    with pytest.raises(SystemExit) as exc:
        main(
            [
                "--scenes",
                str(tmp_path / "missing"),
                "--targets",
                str(tmp_path / "targets"),
                "--out",
                str(tmp_path / "out"),
            ]
        )

    assert exc.value.code == 2
    assert "--scenes" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_parser_verbose_flag() -> None:
    parser = build_parser()
    base = ["--scenes", "s", "--targets", "t", "--out", "o"]

    assert parser.parse_args(base).verbose is False
    assert parser.parse_args([*base, "--verbose"]).verbose is True
