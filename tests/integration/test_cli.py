import pytest
from click.testing import CliRunner
from jobcontainer.CLI.main import cli

CONTAINER = """
container: build
image: $(registry)/build:latest
options: --cpus 2
env:
  TOOL_DIR: $(tools)
ports:
- '$(port):80'
volumes:
- $(src):/src:ro
- /cache
"""

AGENT_ENV = {
    'AGENT_ROOTDIRECTORY': '/agent',
    'AGENT_WORKFOLDER': '/agent/_work',
    'AGENT_TOOLSDIRECTORY': '/agent/_work/_tool',
    'AGENT_PLATFORM': 'linux',
}


@pytest.fixture
def container_file(tmp_path):
    path = tmp_path / "container.yml"
    path.write_text(CONTAINER)
    return str(path)


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'inspect' in result.output
    assert 'translate' in result.output


def test_cli_inspect(container_file, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, [
        '--env-file', str(tmp_path / 'none.env'),
        'inspect', container_file,
        '--var', 'registry=ghcr.io',
        '--var', 'port=8080',
        '--var', 'src=/data',
        '--var', 'tools=/__t',
    ], env=AGENT_ENV)
    assert result.exit_code == 0, result.output
    assert 'Image:   ghcr.io/build:latest' in result.output
    assert 'Options: --cpus 2' in result.output
    assert '/var/run/docker.sock -> /var/run/docker.sock [rw]' in result.output
    assert '/data -> /src [ro]' in result.output
    assert '(pass-through) -> /cache [rw]' in result.output
    assert '$(port):80 => 8080:80' in result.output
    assert 'TOOL_DIR=/__t' in result.output


def test_cli_inspect_service_container(container_file, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'inspect', container_file, '--service'],
                           env=AGENT_ENV)
    assert result.exit_code == 0, result.output
    assert 'docker.sock' not in result.output
    assert 'Job container: False' in result.output


def test_cli_inspect_bad_var(container_file, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'inspect', container_file, '--var', 'novalue'],
                           env=AGENT_ENV)
    assert result.exit_code != 0


def test_cli_inspect_missing_image(tmp_path):
    path = tmp_path / "container.yml"
    path.write_text("container: build\n")
    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'inspect', str(path)], env=AGENT_ENV)
    assert result.exit_code == 1
    assert 'does not specify an image' in result.output


def test_cli_translate(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'translate', '/agent/_work/1/s'],
                           env=AGENT_ENV)
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '/__w/1/s'


def test_cli_translate_to_host(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'translate', '--to-host', '/__t/node'],
                           env=AGENT_ENV)
    assert result.exit_code == 0, result.output
    assert result.output.strip() == '/agent/_work/_tool/node'


def test_cli_translate_unconfigured(tmp_path):
    runner = CliRunner()
    env = {key: None for key in AGENT_ENV}
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'translate', '/x'], env=env)
    assert result.exit_code == 1
    assert 'AGENT_ROOTDIRECTORY' in result.output


def test_cli_unsupported_platform(tmp_path):
    runner = CliRunner()
    env = dict(AGENT_ENV, AGENT_PLATFORM='darwin')
    result = runner.invoke(cli, ['--env-file', str(tmp_path / 'none.env'), 'translate', '/x'], env=env)
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Unsupported AGENT_PLATFORM 'darwin'" in result.output
