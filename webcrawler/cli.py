# === FILE: webcrawler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска webcrawler через командную строку.

Команды:
  crawl SEED [DEPTH [DOWNLOADERS [EXTRACTORS [PER_HOST]]]]
            Обойти граф ссылок начиная с SEED и вывести/сохранить отчёт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --exclude, -x TEXT  Пропускать адреса, содержащие TEXT (можно повторять)
  --timeout SEC       Таймаут одного запроса
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)

Пример:
  webcrawler crawl https://example.com 2 8 4 2 --exclude /logout --json report.json
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from webcrawler import __version__
from webcrawler.aggregator import aggregate_result
from webcrawler.config import load_config
from webcrawler.logger import init_logging
from webcrawler.report.html_report import render_html
from webcrawler.report.json_report import render_json
from webcrawler.scanner import run_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='webcrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
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
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд webcrawler CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seed')
@click.argument('depth', type=int, required=False)
@click.argument('downloaders', type=int, required=False)
@click.argument('extractors', type=int, required=False)
@click.argument('per_host', metavar='PER_HOST', type=int, required=False)
@click.option(
    '--exclude', '-x', 'excludes',
    multiple=True,
    help='Пропускать адреса, содержащие подстроку (можно повторять)'
)
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут одного запроса (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (по умолчанию встроенный)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def crawl(ctx, seed, depth, downloaders, extractors, per_host, excludes,
          timeout, json_output, html_output, template_dir, pretty):
    """Обойти ссылки начиная с SEED и сгенерировать отчёты."""
    try:
        cfg = ctx.obj['config'].override(
            depth=depth,
            downloaders=downloaders,
            extractors=extractors,
            per_host=per_host,
            timeout=timeout,
            excludes=[*ctx.obj['config'].excludes, *excludes] if excludes else None,
        )
    except ValidationError as e:
        print_error(f'Неверные параметры: {e}')

    try:
        result = run_crawl(cfg, seed)
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    report = aggregate_result(result)

    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
