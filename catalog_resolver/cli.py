import json
import sys
from pathlib import Path

import click
import jinja2

from .config import CatalogConfig
from .diagnostics import configure_logging
from .errors import CatalogResolverError, UnknownDefinitionKindError
from .loader import load_output_package, load_source_catalog, load_standard_catalog, read_json
from .metadata import DefinitionKind, Metadata
from .resolver import Resolver

REPORT_FIELDS = [
    ("id", "id"),
    ("url", "url"),
    ("parent", "parent"),
    ("sdType", "sd_type"),
    ("resourceType", "resource_type"),
    ("instanceUsage", "instance_usage"),
    ("version", "version"),
    ("abstract", "abstract"),
]


def render_metadata(metadatas: list[Metadata]) -> str:
    """Render metadata records as a plain text report."""
    template_dir = Path(__file__).parent / "templates"
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        lstrip_blocks=True,
        trim_blocks=True,
    )
    template = env.get_template("metadata.txt.jinja2")
    context = [
        {"name": md.name, "id": md.id, "fields": [(label, getattr(md, attr)) for label, attr in REPORT_FIELDS]}
        for md in metadatas
    ]
    return template.render(metadatas=context)


def parse_kinds(ctx, param, values):
    try:
        return tuple(DefinitionKind.parse(v) for v in values)
    except UnknownDefinitionKindError as e:
        raise click.BadParameter(str(e)) from e


def build_resolver(standard, predefined, package, source, config) -> Resolver:
    source_catalog = load_source_catalog(source) if source else None

    if config is not None:
        package_config = CatalogConfig.from_dict(read_json(config))
    elif source_catalog is not None:
        package_config = source_catalog.config
    else:
        package_config = CatalogConfig()

    standard_catalog = load_standard_catalog(standard, predefined) if standard or predefined else None
    output_package = load_output_package(package, package_config) if package else None
    return Resolver(source_catalog, standard_catalog, output_package)


@click.command()
@click.option("--standard", "-s", multiple=True, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--predefined", "-p", multiple=True, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--package", "-o", default=None, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--source", "-f", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--kind", "-k", "kinds", multiple=True, callback=parse_kinds, help="Restrict the lookup to a definition kind")
@click.option("--all", "all_matches", is_flag=True, default=False, help="Show every match instead of the first")
@click.option("--raw", is_flag=True, default=False, help="Print the raw definition instead of its metadata")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("identifier")
def catalog_resolver(standard, predefined, package, source, config, kinds, all_matches, raw, verbose, identifier):
    """Resolve IDENTIFIER (name, id, URL or alias) against the catalogs."""
    counter = configure_logging(verbose)

    try:
        resolver = build_resolver(standard, predefined, package, source, config)
    except CatalogResolverError as e:
        raise click.ClickException(str(e)) from e

    if raw:
        definition = resolver.lookup_definition(identifier, *kinds)
        found = definition is not None
        if found:
            click.echo(json.dumps(definition, indent=2))
    else:
        if all_matches:
            metadatas = resolver.lookup_all_metadata(identifier, *kinds)
        else:
            metadata = resolver.lookup_metadata(identifier, *kinds)
            metadatas = [metadata] if metadata is not None else []
        found = bool(metadatas)
        if found:
            click.echo(render_metadata(metadatas), nl=False)

    if not found:
        click.echo(f"{identifier}: not found", err=True)
    if not found or counter.errors:
        sys.exit(1)
