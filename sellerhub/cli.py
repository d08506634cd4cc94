"""
Command-line consumer of the seller repository.

Renders every state a repository call emits, so the cache-then-network
sequence is visible::

    sellerhub list
    sellerhub search --by title pizza
    sellerhub show 42
    sellerhub add "Pizza Roma" --location "Tehran" --seller-category 3
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import Optional, assert_never

import click

from sellerhub.container import Container, create_container
from sellerhub.logger import StructuredLogger
from sellerhub.models.seller import Seller
from sellerhub.models.seller_filter import SellerFilter, SellerFilterField
from sellerhub.models.service_result import Error, Loading, Success, is_terminal


def format_seller(seller: Seller) -> str:
    parts = [f"#{seller.id}", seller.title]
    if seller.location_title:
        parts.append(f"@ {seller.location_title}")
    if seller.seller_category_id is not None:
        parts.append(f"[category {seller.seller_category_id}]")
    return " ".join(parts)


def render_result(result: Loading | Success | Error) -> list[str]:
    """Turn one emitted state into output lines.  Every variant is handled."""
    match result:
        case Loading(is_loading=True):
            return ["… loading"]
        case Loading(is_loading=False):
            return ["done"]
        case Success(data=None):
            return ["(no data)"]
        case Success(data=list() as sellers):
            if not sellers:
                return ["(no sellers)"]
            return [f"  {format_seller(seller)}" for seller in sellers]
        case Success(data=Seller() as seller):
            return [format_seller(seller)]
        case Success(data=value):
            return [f"ok: {value}"]
        case Error(message=message):
            return [f"error: {message or 'unknown error'}"]
        case _:
            assert_never(result)


def _emit(results: Iterable[Loading | Success | Error]) -> bool:
    """Echo every state; return ``False`` when the stream ended in ``Error``."""
    ok = True
    for result in results:
        for line in render_result(result):
            click.echo(line, err=isinstance(result, Error))
        if isinstance(result, Error):
            ok = False
        if is_terminal(result):
            break
    return ok


def _container(ctx: click.Context) -> Container:
    return ctx.obj["container"]


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """Browse and edit sellers through the local cache and the remote API."""
    ctx.ensure_object(dict)
    if "container" not in ctx.obj:
        logger = StructuredLogger(
            name="sellerhub",
            stream=sys.stderr,
            level=logging.DEBUG if debug else None,
        )
        container = create_container(logger=logger)
        ctx.obj["container"] = container
        ctx.call_on_close(container["db"].close)


@main.command(name="list")
@click.pass_context
def list_sellers(ctx: click.Context) -> None:
    """Show cached sellers, then refresh them from the network."""
    if not _emit(_container(ctx)["seller_repository"].get_sellers()):
        ctx.exit(1)


@main.command()
@click.option(
    "--by",
    "field",
    type=click.Choice([f.value for f in SellerFilterField]),
    default=SellerFilterField.TITLE.value,
    show_default=True,
    help="Seller attribute to filter on",
)
@click.argument("value", required=False)
@click.pass_context
def search(ctx: click.Context, field: str, value: Optional[str]) -> None:
    """Search sellers on the network by one attribute."""
    filter_field = SellerFilterField(field)
    if filter_field.is_text:
        query_value: Optional[int | str] = value
    else:
        try:
            query_value = int(value)
        except (TypeError, ValueError):
            raise click.BadParameter(
                f"{field} needs an integer id", param_hint="VALUE"
            ) from None

    seller_filter = SellerFilter(field=filter_field, value=query_value)
    if not _emit(_container(ctx)["seller_repository"].get_sellers_by(seller_filter)):
        ctx.exit(1)


@main.command()
@click.argument("seller_id", type=int)
@click.pass_context
def show(ctx: click.Context, seller_id: int) -> None:
    """Fetch one seller from the network."""
    if not _emit([_container(ctx)["seller_repository"].get_seller_by_id(seller_id)]):
        ctx.exit(1)


@main.command()
@click.argument("title")
@click.option("--description", default=None)
@click.option("--location", "location_title", default=None)
@click.option("--seller-category", "seller_category_id", type=int, default=None)
@click.option("--food-category", "food_category_id", type=int, default=None)
@click.pass_context
def add(
    ctx: click.Context,
    title: str,
    description: Optional[str],
    location_title: Optional[str],
    seller_category_id: Optional[int],
    food_category_id: Optional[int],
) -> None:
    """Create a seller remotely and cache the result."""
    seller = Seller(
        title=title,
        description=description,
        location_title=location_title,
        seller_category_id=seller_category_id,
        food_category_id=food_category_id,
    )
    if not _emit([_container(ctx)["seller_repository"].insert_seller(seller)]):
        ctx.exit(1)


if __name__ == "__main__":
    main()
