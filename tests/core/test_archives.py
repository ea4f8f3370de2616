"""Tests for ArchiveExtractor."""

import pytest

from nibras_shell.core.archives import ArchiveExtractor
from nibras_shell.domain.backup import StepStatus


class TestExtract:
    """Test single and batch extraction."""

    @pytest.mark.asyncio
    async def test_missing_archive_is_skipped(self, tmp_path, fake_runner):
        result = await ArchiveExtractor().extract(tmp_path / "Magma.tar.gz", tmp_path)

        assert result.status is StepStatus.SKIPPED
        assert fake_runner.calls == []

    @pytest.mark.asyncio
    async def test_runs_tar(self, tmp_path, fake_runner):
        archive = tmp_path / "Magma.tar.gz"
        archive.write_bytes(b"")
        target = tmp_path / "icons"

        result = await ArchiveExtractor().extract(archive, target)

        assert result.status is StepStatus.DONE
        assert target.is_dir()
        assert fake_runner.calls == [["tar", "xf", str(archive), "-C", str(target)]]

    @pytest.mark.asyncio
    async def test_tar_failure(self, tmp_path, fake_runner):
        archive = tmp_path / "Magma.tar.gz"
        archive.write_bytes(b"")
        fake_runner.on("tar", returncode=2)

        result = await ArchiveExtractor().extract(archive, tmp_path / "icons")

        assert result.status is StepStatus.FAILED

    @pytest.mark.asyncio
    async def test_extract_all_mixed(self, tmp_path, fake_runner):
        source = tmp_path / "src"
        source.mkdir()
        (source / "BeautySolar.tar.gz").write_bytes(b"")

        results = await ArchiveExtractor().extract_all(
            ["BeautySolar.tar.gz", "Magma.tar.gz"], source, tmp_path / "icons"
        )

        assert [r.status for r in results] == [StepStatus.DONE, StepStatus.SKIPPED]

    @pytest.mark.asyncio
    async def test_extract_all_missing_source(self, tmp_path, fake_runner):
        results = await ArchiveExtractor().extract_all(
            ["Magma.tar.gz"], tmp_path / "nope", tmp_path / "icons"
        )

        assert len(results) == 1
        assert results[0].status is StepStatus.SKIPPED
        assert fake_runner.calls == []
