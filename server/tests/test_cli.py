import pytest

from igreja.client.cli import build_parser, run
from igreja.client.storage import AUTH_TOKEN_KEY, FileTokenStore


@pytest.fixture()
def invoke(make_api, tmp_path):
    token_file = tmp_path / "session.json"

    async def _invoke(*argv: str) -> int:
        args = build_parser().parse_args(["--token-file", str(token_file), *argv])
        return await run(args, api=make_api())

    _invoke.token_file = token_file
    return _invoke


@pytest.mark.asyncio
async def test_login_whoami_can_and_logout(invoke, capsys):
    assert await invoke("register", "--name", "Ana", "--email", "ana@x.com", "--role", "lider", "--password", "secret123") == 0
    assert await invoke("login", "--email", "ana@x.com", "--password", "secret123") == 0
    assert FileTokenStore(invoke.token_file).get(AUTH_TOKEN_KEY)

    assert await invoke("whoami") == 0
    assert "ana@x.com" in capsys.readouterr().out

    assert await invoke("can", "membro") == 0
    assert await invoke("can", "admin") == 1
    assert capsys.readouterr().out.split() == ["yes", "no"]

    assert await invoke("logout") == 0
    assert FileTokenStore(invoke.token_file).get(AUTH_TOKEN_KEY) is None
    assert await invoke("whoami") == 1


@pytest.mark.asyncio
async def test_login_failure_prints_error(invoke, capsys):
    code = await invoke("login", "--email", "ghost@x.com", "--password", "nope")

    assert code == 1
    assert "Invalid credentials" in capsys.readouterr().err
    assert FileTokenStore(invoke.token_file).get(AUTH_TOKEN_KEY) is None
