import asyncio
import logging
import sys
from functools import wraps

import click

from kong_client.client import KongClient
from kong_client.config import load_config
from kong_client.exceptions import KongClientError, NetworkError
from kong_client.models import ConsumerGroup
from kong_client.pagination import PAGE_SIZE, ListOpt


def run_async(coro):
    """Helper to run async functions synchronously in Click commands."""
    return asyncio.run(coro)


def handle_api_exceptions(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NetworkError as e:
            click.echo(f"Connection to Kong could not be established: {click.style(e.message, fg='red')}")
            sys.exit(1)
        except KongClientError as e:
            status = e.status_code if e.status_code is not None else "error"
            click.echo(f"[{click.style(str(status), fg='red')}] {e.message}")
            sys.exit(1)

    return wrapper


def echo_entity(entity):
    click.echo(entity.model_dump_json(indent=4, exclude_none=True))


async def _with_client(ctx: click.Context, operation):
    async with KongClient.from_config(ctx.obj["CONFIG"]) as kong:
        return await operation(kong.consumer_groups)


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to a client YAML file")
@click.option("--admin-url", envvar="KONG_ADMIN_URL", help="Kong Admin API URL")
@click.option("--admin-token", envvar="KONG_ADMIN_TOKEN", help="RBAC admin token")
@click.option("--workspace", "-w", envvar="KONG_WORKSPACE", help="Workspace to operate in")
@click.option("--verbose", "-v", is_flag=True, help="Log HTTP requests")
@click.pass_context
def cli(ctx, config_path, admin_url, admin_token, workspace, verbose):
    """Manage Kong consumer groups."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    config = load_config(config_path)
    overrides = {
        "admin_url": admin_url,
        "admin_token": admin_token,
        "workspace": workspace,
    }
    config = config.model_copy(update={k: v for k, v in overrides.items() if v})

    ctx.ensure_object(dict)
    ctx.obj["CONFIG"] = config


@cli.command("list")
@click.option("--tag", "-t", "tags", multiple=True, help="Filter by tag (repeatable)")
@click.option("--match-all-tags", is_flag=True, help="Require all given tags")
@click.option("--size", "-s", type=click.IntRange(min=1), help="Page size")
@click.option("--offset", help="Offset token of the page to fetch")
@click.option("--all", "fetch_all", is_flag=True, help="Follow pagination to the end")
@click.pass_context
@handle_api_exceptions
def list_groups(ctx, tags, match_all_tags, size, offset, fetch_all):
    if fetch_all and size is None:
        size = PAGE_SIZE
    opt = ListOpt(size=size, offset=offset, tags=list(tags) or None, match_all_tags=match_all_tags)

    async def operation(groups):
        if fetch_all:
            return [group async for group in groups.iter_all(opt)], None
        return await groups.list(opt)

    entities, next_opt = run_async(_with_client(ctx, operation))

    for entity in entities:
        echo_entity(entity)

    if next_opt is not None:
        click.echo(f"Next offset: {click.style(next_opt.offset, fg='green')}", err=True)


@cli.command("get")
@click.argument("name_or_id")
@click.option("--members", is_flag=True, help="Include consumers and plugins")
@click.pass_context
@handle_api_exceptions
def get_group(ctx, name_or_id, members):
    async def operation(groups):
        if members:
            return await groups.get_object(name_or_id)
        return await groups.get(name_or_id)

    entity = run_async(_with_client(ctx, operation))
    if entity is None:
        click.echo(f"Kong returned no consumer group for {click.style(name_or_id, fg='red')}")
        sys.exit(1)

    echo_entity(entity)


@cli.command("create")
@click.option("--name", "-n", required=True, help="Group name")
@click.option("--id", "group_id", help="Use this ID instead of a generated one")
@click.option("--tag", "-t", "tags", multiple=True, help="Tag (repeatable)")
@click.pass_context
@handle_api_exceptions
def create_group(ctx, name, group_id, tags):
    group = ConsumerGroup(id=group_id, name=name, tags=list(tags) or None)

    echo_entity(run_async(_with_client(ctx, lambda groups: groups.create(group))))


@cli.command("update")
@click.argument("group_id")
@click.option("--name", "-n", help="New group name")
@click.option("--tag", "-t", "tags", multiple=True, help="Replace tags (repeatable)")
@click.pass_context
@handle_api_exceptions
def update_group(ctx, group_id, name, tags):
    group = ConsumerGroup(id=group_id, name=name, tags=list(tags) or None)

    echo_entity(run_async(_with_client(ctx, lambda groups: groups.update(group))))


@cli.command("delete")
@click.argument("name_or_id")
@click.pass_context
@handle_api_exceptions
def delete_group(ctx, name_or_id):
    run_async(_with_client(ctx, lambda groups: groups.delete(name_or_id)))
    click.echo(f"Deleted consumer group {click.style(name_or_id, fg='green')}")


if __name__ == "__main__":
    cli()
