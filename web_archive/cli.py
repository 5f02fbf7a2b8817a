# === FILE: web_archive/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для архивирования страниц через командную строку.

Команды:
  archive URL   Скачать страницу с ресурсами и вывести самодостаточный HTML
  resources URL Показать JSON-отчёт о скачанных ресурсах
  config        Показать текущие настройки

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию

Пример:
  web-archive archive https://example.com/ --output example.html
"""
import asyncio
import sys
from pathlib import Path

import click

from web_archive import __version__
from web_archive.archiver.archiver import archive
from web_archive.config import load_options
from web_archive.errors import WebArchiveError
from web_archive.logger import DEFAULT_FORMAT, init_logging
from web_archive.parser.html_parser import parse_resource_urls
from web_archive.report.json_report import build_report, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='web-archive, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Архивирование веб-страниц в один самодостаточный HTML-файл."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        options = load_options(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['options'] = options


@cli.command('archive', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить документ в файл вместо stdout'
)
@click.option(
    '--insecure', '-k', is_flag=True,
    help='Не проверять TLS-сертификаты'
)
@click.option(
    '--timeout', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут одного запроса (секунд)'
)
@click.pass_context
def archive_page(ctx, url, output, insecure, timeout):
    """Скачать страницу URL и встроить в неё изображения, стили и скрипты."""
    options = ctx.obj['options']
    update = {}
    if insecure:
        update['accept_invalid_certificates'] = True
    if timeout is not None:
        update['timeout'] = timeout
    if update:
        options = options.model_copy(update=update)

    try:
        page = asyncio.run(archive(url, options))
        document = page.embed_resources()
    except WebArchiveError as e:
        print_error(f'Ошибка при архивировании: {e}')

    if output is None:
        click.echo(document)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document, encoding='utf-8')
    except OSError as e:
        print_error(f'Ошибка при сохранении: {e}')
    click.echo(f'Saved: {output}')


@cli.command('resources', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def list_resources(ctx, url, json_output, pretty):
    """Скачать страницу URL и показать, какие ресурсы удалось получить."""
    try:
        page = asyncio.run(archive(url, ctx.obj['options']))
    except WebArchiveError as e:
        print_error(f'Ошибка при архивировании: {e}')

    discovered = len(parse_resource_urls(page.url, page.content))
    report = build_report(page, discovered)

    if not json_output:
        click.echo(report.json(pretty=pretty))
        return
    try:
        saved = render_json(report, json_output, pretty=pretty)
    except OSError as e:
        print_error(f'Ошибка при сохранении JSON: {e}')
    click.echo(f'JSON report: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущие настройки в JSON."""
    options = ctx.obj['options']
    click.echo(options.model_dump_json(indent=2))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
