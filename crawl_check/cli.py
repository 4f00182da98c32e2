# === FILE: crawl_check/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска CrawlCheck через командную строку.

Команды:
  run       Обойти сайт в headless-браузере, проверить логи, записать отчёт
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --base-url URL      Корневой URL сайта (override base_url / BASE_URL)
  --limit INT         Макс. число страниц (override max_pages / MAX_PAGES)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --json PATH         Путь JSON-отчёта (по умолчанию <report_dir>/result_YYYYMMDDHHMM.json)
  --html PATH         Дополнительно сохранить HTML-отчёт
  --out-dir DIR       Каталог для JSON-отчёта (override report_dir)
  --no-sitemap        Не читать sitemap.xml
  --no-logs           Пропустить проверку серверных логов

Код выхода run: 0, если все страницы прошли и в логах нет [error], иначе 1.

Пример:
  BASE_URL=http://localhost:8080 crawl-check run --limit 50 --html report.html
"""
import asyncio
import sys
from pathlib import Path

import click

from crawl_check import __version__
from crawl_check.config import CrawlConfig, apply_env, load_config, with_overrides
from crawl_check.engine import fatal_report, run_check
from crawl_check.logger import DEFAULT_FORMAT, init_logging, logger
from crawl_check.report.console import summary_lines
from crawl_check.report.html_report import render_html
from crawl_check.report.json_report import default_report_path, render_json
from crawl_check.utils import iso_timestamp, utc_now

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='CrawlCheck, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--base-url', 'base_url',
    default=None,
    help='Корневой URL сайта (override base_url)'
)
@click.option(
    '--limit', '-l', 'limit',
    type=int,
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
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, base_url, limit, log_level, log_file, log_format):
    """Смоук-проверка сайта в headless-браузере."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    try:
        cfg = load_config(config_path)
        cfg = apply_env(cfg)
        cfg = with_overrides(cfg, base_url=base_url, max_pages=limit)
    except Exception as e:
        # run still owes a report, the other commands just fail
        if ctx.invoked_subcommand != 'run':
            print_error(f'Ошибка загрузки конфигурации: {e}')
        logger.error('Ошибка загрузки конфигурации: %s', e)
        ctx.obj['config_error'] = e
        cfg = None
    ctx.obj['config'] = cfg


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь JSON-отчёта'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--out-dir', '-o', 'out_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для JSON-отчёта (override report_dir)'
)
@click.option('--no-sitemap', is_flag=True, help='Не читать sitemap.xml')
@click.option('--no-logs', is_flag=True, help='Пропустить проверку серверных логов')
@click.pass_context
def run(ctx, json_output, html_output, out_dir, no_sitemap, no_logs):
    """Обойти сайт, записать отчёт и выйти с кодом 0/1."""
    started_at = iso_timestamp(utc_now())
    config_error = ctx.obj.get('config_error')
    cfg = ctx.obj['config']
    if cfg is None:
        # defaults only locate the report and fill baseUrl
        cfg = CrawlConfig()
    try:
        cfg = with_overrides(
            cfg,
            report_dir=str(out_dir) if out_dir else None,
            use_sitemap=False if no_sitemap else None,
            log_source='none' if no_logs else None,
        )
    except Exception as e:
        logger.error('Ошибка конфигурации: %s', e)
        config_error = config_error or e

    if config_error is not None:
        report = fatal_report(cfg, config_error, started_at)
    else:
        click.echo(f'Starting check: {cfg.base_url_str}')
        try:
            report = asyncio.run(run_check(cfg))
        except Exception as e:
            logger.exception('Прогон прерван: %s', e)
            report = fatal_report(cfg, e, started_at)

    try:
        saved_json = render_json(report, json_output or default_report_path(cfg.report_dir))
    except OSError as e:
        click.secho(f'Не удалось записать отчёт: {e}', fg='red', err=True)
        if report.summary.fatal_error is not None:
            click.secho(f'Исходная ошибка: {report.summary.fatal_error}', fg='red', err=True)
        ctx.exit(1)

    for line in summary_lines(report):
        click.echo(line)
    click.echo(f'JSON report: {saved_json}')

    if html_output:
        try:
            saved_html = render_html(report, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            click.secho(f'Ошибка при сохранении HTML: {e}', fg='red', err=True)

    ctx.exit(report.exit_code)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать итоговую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
