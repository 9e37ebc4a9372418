"""
Command Line Interface for jobcontainer.
"""
import logging

import click

from ..config import load_agent_settings
from ..CONTAINERS.container_info import ContainerInfo, build_path_translator
from ..exceptions import ContainerConfigurationError, DirectoryLookupError
from ..MANAGERS.directory_manager import EnvironmentDirectoryLookup
from ..PARSERS.resource_parser import ContainerResourceParser
from ..UTILS.path_translator import TargetPlatform
from ..UTILS.string_interpolation import Variables


def _parse_variables(pairs):
    variables = {}
    for pair in pairs:
        if '=' not in pair:
            raise click.BadParameter(f"expected NAME=VALUE, got '{pair}'", param_hint='--var')
        name, value = pair.split('=', 1)
        variables[name] = value
    return variables


@click.group()
@click.option('--env-file', default='.env', help='Agent settings file')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, env_file, verbose):
    """
    jobcontainer - inspect how a job container sees the agent host.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    try:
        ctx.obj['settings'] = load_agent_settings(env_file)
    except ContainerConfigurationError as e:
        raise click.ClickException(str(e))


def _build_container(ctx, file, alias, service):
    settings = ctx.obj['settings']
    try:
        resource = ContainerResourceParser().parse(file, alias)
        return ContainerInfo(
            EnvironmentDirectoryLookup(settings),
            resource,
            is_job_container=not service,
            platform=settings.platform,
        )
    except (ContainerConfigurationError, DirectoryLookupError) as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--container', '-c', 'alias', default=None, help='Container alias to pick')
@click.option('--service', is_flag=True, help='Treat as a service container')
@click.option('--var', 'var_pairs', multiple=True, help='Pipeline variable NAME=VALUE')
@click.pass_context
def inspect(ctx, file, alias, service, var_pairs):
    """Show the resolved mounts, ports and environment of a container."""
    info = _build_container(ctx, file, alias, service)
    info.expand_properties(Variables(_parse_variables(var_pairs)))

    click.echo(f"Name:    {info.container_display_name}")
    click.echo(f"Image:   {info.container_image}")
    if info.container_create_options:
        click.echo(f"Options: {info.container_create_options}")
    click.echo(f"Job container: {info.is_job_container}")

    click.echo("Mounts:")
    for mount in info.mount_volumes:
        mode = 'ro' if mount.read_only else 'rw'
        source = mount.source_volume_path or '(pass-through)'
        click.echo(f"  {source} -> {mount.target_volume_path} [{mode}]")

    click.echo("Ports:")
    for declared, resolved in info.user_port_mappings.items():
        click.echo(f"  {resolved}" if declared == resolved else f"  {declared} => {resolved}")

    click.echo("Environment:")
    for name, value in info.container_environment_variables.items():
        click.echo(f"  {name}={value}")


@cli.command()
@click.argument('path')
@click.option('--to-host', is_flag=True, help='Translate a container path to the host')
@click.pass_context
def translate(ctx, path, to_host):
    """Translate PATH between the agent host and a job container."""
    settings = ctx.obj['settings']
    platform = settings.platform or TargetPlatform.current()
    try:
        translator = build_path_translator(EnvironmentDirectoryLookup(settings), platform)
    except DirectoryLookupError as e:
        raise click.ClickException(str(e))
    if to_host:
        click.echo(translator.to_host_path(path))
    else:
        click.echo(translator.to_container_path(path))


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
