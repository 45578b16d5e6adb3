# === FILE: page_harvest/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера PageHarvest через командную строку.

Команды:
  crawl     Обойти страницы от стартового адреса и отправить пакет в приёмник
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --limit INT         Макс. число страниц (override max_pages)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --seed URL          Стартовый адрес (override seed_url)
  --delay SEC         Пауза между запросами
  --timeout SEC       Таймаут одного запроса
  --max-links INT     Макс. число ссылок с одной страницы
  --sink URL          Адрес приёмника (env CRAWLER_SINK_URL)
  --api-key KEY       Ключ API приёмника (env CRAWLER_API_KEY)
  --json PATH         Сохранить собранные страницы в JSON-файл
  --pretty            Преформатировать JSON (отступ 2)
  --no-upload         Не отправлять пакет в приёмник

Пример:
  CRAWLER_API_KEY=secret page-harvest --limit 10 crawl --seed https://en.wikipedia.org/wiki/DevOps
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from page_harvest import __version__
from page_harvest.config import load_config, with_overrides
from page_harvest.engine import start_crawl
from page_harvest.errors import MissingCredential
from page_harvest.logger import DEFAULT_FORMAT, init_logging
from page_harvest.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PageHarvest, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц для обхода (override max_pages)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, limit, log_level, log_file, log_format):
    """Группа команд PageHarvest CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = with_overrides(load_config(config_path), max_pages=limit)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--seed', 'seed_url', default=None, help='Стартовый адрес (override seed_url)')
@click.option('--delay', type=click.FloatRange(min=0), default=None, help='Пауза между запросами (секунд)')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Таймаут одного запроса (секунд)')
@click.option('--max-links', 'max_links', type=click.IntRange(min=0), default=None,
              help='Макс. число ссылок с одной страницы')
@click.option('--sink', 'sink_url', envvar='CRAWLER_SINK_URL', default=None, help='Адрес приёмника пакета')
@click.option('--api-key', 'api_key', envvar='CRAWLER_API_KEY', default=None, help='Ключ API приёмника')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить собранные страницы в JSON-файл'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--no-upload', 'no_upload', is_flag=True, help='Не отправлять пакет в приёмник')
@click.pass_context
def crawl(ctx, seed_url, delay, timeout, max_links, sink_url, api_key, json_output, pretty, no_upload):
    """Обойти страницы и отправить собранный пакет."""
    try:
        cfg = with_overrides(
            ctx.obj['config'],
            seed_url=seed_url,
            delay=delay,
            timeout=timeout,
            max_links_per_page=max_links,
            sink_url=sink_url,
            api_key=api_key,
        )
    except Exception as e:
        print_error(f'Ошибка в параметрах: {e}')

    click.echo(f'Start URL: {cfg.seed_url}')
    click.echo(f'Max pages: {cfg.max_pages}')
    try:
        report = asyncio.run(start_crawl(cfg, upload=not no_upload))
    except MissingCredential:
        print_error('ERROR: CRAWLER_API_KEY environment variable is not set! '
                    'Pass --api-key or set CRAWLER_API_KEY.')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(f'Total pages crawled: {len(report.pages)}')

    if json_output:
        try:
            saved = render_json(report.pages, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if not report.ok:
        print_error(f'Upload failed: {report.upload}')
    if report.upload is not None:
        click.echo(f'Success! Inserted {report.upload.inserted}/{report.upload.total} pages')
    elif not no_upload:
        click.echo('Nothing to upload')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(mode='json'), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
