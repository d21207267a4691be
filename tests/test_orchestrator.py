import pytest

from podpatcher.download import FileVerifier
from podpatcher.exceptions import ChecksumMismatchError, NetworkError, ParseError, ValidationError
from podpatcher.models import MANIFEST_URL, PatcherConfig
from podpatcher.orchestrator import PatchOrchestrator
from podpatcher.progress import ProgressReporter
from tests.helpers import FakeSession, build_manifest, crc_of


def _orchestrator(pod_dir, routes, reporter=None, **config) -> PatchOrchestrator:
    return PatchOrchestrator(
        PatcherConfig(pod_dir=str(pod_dir), **config),
        session=FakeSession(routes),
        reporter=reporter,
    )


@pytest.mark.asyncio
async def test_run_replaces_outdated_file(pod_dir, capsys) -> None:
    payload = b"new file content"
    (pod_dir / "data").mkdir()
    (pod_dir / "data" / "a.txt").write_bytes(b"different")
    manifest = build_manifest(
        {"name": "data/a.txt", "crc": crc_of(payload), "links": ["https://x/a.txt"]},
    )
    reporter = ProgressReporter()
    orchestrator = _orchestrator(
        pod_dir,
        {MANIFEST_URL: manifest, "https://x/a.txt": payload},
        reporter=reporter,
    )

    result = await orchestrator.run()

    assert FileVerifier.checksum((pod_dir / "data" / "a.txt").read_bytes()) == crc_of(payload)
    assert result.outdated == ["data/a.txt"]
    assert result.downloaded == 1
    assert reporter.total == 1
    assert reporter.completed == 1
    assert not (pod_dir / "temp").exists()
    out = capsys.readouterr().out
    assert "Will download 1 outdated files" in out
    assert "Downloaded 1 files successfully" in out


@pytest.mark.asyncio
async def test_run_without_crc_reports_up_to_date(pod_dir, capsys) -> None:
    (pod_dir / "a.txt").write_bytes(b"local")
    manifest = build_manifest({"name": "a.txt", "crc": "", "links": ["https://x/a.txt"]})
    session_routes = {MANIFEST_URL: manifest}
    orchestrator = _orchestrator(pod_dir, session_routes)

    result = await orchestrator.run()

    assert result.up_to_date
    assert (pod_dir / "a.txt").read_bytes() == b"local"
    assert not (pod_dir / "temp").exists()
    assert "All files are up to date" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_with_force_redownloads_matching_file(pod_dir) -> None:
    payload = b"same"
    (pod_dir / "a.txt").write_bytes(payload)
    manifest = build_manifest({"name": "a.txt", "crc": crc_of(payload), "links": ["https://x/a.txt"]})
    orchestrator = _orchestrator(pod_dir, {MANIFEST_URL: manifest, "https://x/a.txt": payload}, force=True)

    result = await orchestrator.run()

    assert result.outdated == ["a.txt"]
    assert result.downloaded == 1
    assert orchestrator._session.requested == [MANIFEST_URL, "https://x/a.txt"]


@pytest.mark.asyncio
async def test_run_checksum_mismatch_keeps_original_and_cleans_temp(pod_dir) -> None:
    (pod_dir / "a.txt").write_bytes(b"original")
    manifest = build_manifest({"name": "a.txt", "crc": crc_of(b"expected"), "links": ["https://x/a.txt"]})
    orchestrator = _orchestrator(pod_dir, {MANIFEST_URL: manifest, "https://x/a.txt": b"tampered"})

    with pytest.raises(ChecksumMismatchError):
        await orchestrator.run()

    assert (pod_dir / "a.txt").read_bytes() == b"original"
    assert not (pod_dir / "temp").exists()


@pytest.mark.asyncio
async def test_run_dry_run_lists_without_downloading(pod_dir, capsys) -> None:
    (pod_dir / "a.txt").write_bytes(b"old")
    manifest = build_manifest({"name": "a.txt", "crc": crc_of(b"new"), "links": ["https://x/a.txt"]})
    orchestrator = _orchestrator(pod_dir, {MANIFEST_URL: manifest}, dry_run=True)

    result = await orchestrator.run()

    assert result.dry_run
    assert result.outdated == ["a.txt"]
    assert orchestrator._session.requested == [MANIFEST_URL]
    assert (pod_dir / "a.txt").read_bytes() == b"old"
    assert "  a.txt" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_reports_restart_required(pod_dir, capsys) -> None:
    (pod_dir / "Patch_D2.mpq").write_bytes(b"old")
    manifest = build_manifest(
        {
            "name": "Patch_D2.mpq",
            "crc": crc_of(b"new"),
            "links": ["https://x/Patch_D2.mpq"],
            "restartRequired": "true",
        }
    )
    orchestrator = _orchestrator(pod_dir, {MANIFEST_URL: manifest, "https://x/Patch_D2.mpq": b"new"})

    result = await orchestrator.run()

    assert result.restart_required == ["Patch_D2.mpq"]
    assert "Restart required after updating: Patch_D2.mpq" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_validates_before_fetching(tmp_path) -> None:
    orchestrator = _orchestrator(tmp_path, {})

    with pytest.raises(ValidationError):
        await orchestrator.run()

    assert orchestrator._session.requested == []


@pytest.mark.asyncio
async def test_run_manifest_fetch_failure(pod_dir) -> None:
    with pytest.raises(NetworkError):
        await _orchestrator(pod_dir, {MANIFEST_URL: 500}).run()


@pytest.mark.asyncio
async def test_run_malformed_manifest(pod_dir) -> None:
    with pytest.raises(ParseError):
        await _orchestrator(pod_dir, {MANIFEST_URL: "<filelist><file"}).run()
