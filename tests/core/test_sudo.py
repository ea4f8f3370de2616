"""Tests for SudoKeepAlive."""

import asyncio

import pytest

from nibras_shell.core.sudo import SudoKeepAlive
from nibras_shell.exceptions import PreconditionError


class TestSudoKeepAlive:
    """Test authentication and the refresh task lifecycle."""

    @pytest.mark.asyncio
    async def test_authenticates_and_refreshes(self, fake_runner):
        async with SudoKeepAlive(interval=0.01) as keepalive:
            assert keepalive.running
            for _ in range(50):
                if fake_runner.commands("sudo", "-n", "true"):
                    break
                await asyncio.sleep(0.01)

        assert fake_runner.calls[0] == ["sudo", "-v"]
        assert fake_runner.commands("sudo", "-n", "true")
        assert not keepalive.running

    @pytest.mark.asyncio
    async def test_task_cancelled_on_error(self, fake_runner):
        keepalive = SudoKeepAlive(interval=60)

        with pytest.raises(RuntimeError):
            async with keepalive:
                raise RuntimeError("boom")

        assert not keepalive.running

    @pytest.mark.asyncio
    async def test_failed_authentication(self, fake_runner):
        fake_runner.on("sudo", "-v", returncode=1)
        keepalive = SudoKeepAlive()

        with pytest.raises(PreconditionError):
            async with keepalive:
                pass

        assert not keepalive.running
