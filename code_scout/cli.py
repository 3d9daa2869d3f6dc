# === FILE: code_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска аудитора CodeScout через командную строку.

Команды:
  audit     Проверить custom code текущей страницы и вывести/сохранить отчёты
  check     Проверить HTML-фрагмент из файла или stdin
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда audit опции:
  --pages PATH        Экспорт списка страниц (JSON/YAML)
  --url URL           HTTP-эндпоинт со списком страниц
  --page-id ID        Проверить страницу по id вместо выбранной
  --format FMT        text | json
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --repeat N          Повторить аудит N раз (аналог кнопки Refresh)

Пример:
  code-scout audit --pages pages.json --format json --pretty
"""
import asyncio
import sys
import time
from pathlib import Path

import click
from pydantic import ValidationError

from code_scout import __version__
from code_scout.auditor import Auditor
from code_scout.config import AuditConfig, load_config
from code_scout.exceptions import DataUnavailable, FetchFailed
from code_scout.logger import init_logging
from code_scout.models import AuditReport, Region
from code_scout.report import dumps, render_html, render_json, render_text
from code_scout.source import StaticPageSource

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _override(cfg: AuditConfig, pages_file=None, pages_url=None, page_id=None) -> AuditConfig:
    """Опции командной строки важнее конфига: источник из CLI заменяет источник из файла."""
    data = cfg.model_dump(mode="json")
    if pages_file is not None:
        data.update(pages_file=pages_file, pages_url=None)
    if pages_url is not None:
        data.update(pages_url=pages_url, pages_file=None)
    if page_id is not None:
        data["page_id"] = page_id
    return AuditConfig(**data)


def _emit(report: AuditReport, fmt, pretty, json_output, html_output, template_dir):
    if fmt == 'json':
        click.echo(dumps(report, pretty=pretty))
    else:
        click.echo(render_text(report, color=True))

    if json_output:
        try:
            saved_json = render_json(report, json_output, indent=2 if pretty else None)
            click.echo(f'JSON report: {saved_json}', err=True)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


def _run_once(auditor: Auditor):
    """Один запуск аудита; None, если текущая страница не найдена.

    FetchFailed пробрасывается: решение, прерывать ли команду, за вызывающим.
    """
    try:
        return asyncio.run(auditor.run())
    except DataUnavailable as e:
        click.secho(str(e), fg='yellow', err=True)
        return None


_output_options = [
    click.option('--format', '-f', 'fmt', type=click.Choice(['text', 'json']),
                 default='text', show_default=True, help='Формат вывода в stdout'),
    click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)'),
    click.option('--json', '-j', 'json_output', default=None,
                 type=click.Path(writable=True, dir_okay=False, path_type=Path),
                 help='Сохранить JSON-отчёт в файл'),
    click.option('--html', 'html_output', default=None,
                 type=click.Path(writable=True, dir_okay=False, path_type=Path),
                 help='Сохранить HTML-отчёт в файл'),
    click.option('--template', '-t', 'template_dir', default=None,
                 type=click.Path(exists=True, file_okay=False, path_type=Path),
                 help='Папка с Jinja2-шаблонами (по умолчанию встроенная)'),
]


def output_options(func):
    for option in reversed(_output_options):
        func = option(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='CodeScout, version %(version)s')
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
    """Аудит custom code страницы: внешние скрипты, стили и inline-код."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.option('--pages', '-p', 'pages_file', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Экспорт списка страниц (JSON/YAML)')
@click.option('--url', '-u', 'pages_url', default=None, help='HTTP-эндпоинт со списком страниц')
@click.option('--page-id', 'page_id', default=None, help='Id страницы вместо выбранной')
@output_options
@click.option('--repeat', type=click.IntRange(min=1), default=1, show_default=True,
              help='Сколько раз повторить аудит')
@click.option('--interval', type=click.FloatRange(min=0), default=0.0, show_default=True,
              help='Пауза между повторами (секунд)')
@click.pass_context
def audit(ctx, pages_file, pages_url, page_id, fmt, pretty, json_output, html_output,
          template_dir, repeat, interval):
    """Проверить custom code текущей страницы."""
    try:
        cfg = _override(ctx.obj['config'], pages_file=pages_file, pages_url=pages_url,
                        page_id=page_id)
    except (OSError, ValidationError) as e:
        print_error(f'Ошибка конфигурации: {e}')

    try:
        auditor = Auditor(cfg)
    except DataUnavailable as e:
        click.secho(str(e), fg='yellow', err=True)
        return

    failed = False
    for attempt in range(repeat):
        if attempt and interval:
            time.sleep(interval)
        try:
            report = _run_once(auditor)
        except FetchFailed as e:
            # прерывается только этот запуск
            click.secho(f'Error: {e}', fg='red', err=True)
            failed = True
            continue
        if report is not None:
            _emit(report, fmt, pretty, json_output, html_output, template_dir)

    if failed:
        sys.exit(1)


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.argument('fragment', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--region', type=click.Choice([r.value for r in Region]), default=Region.BODY.value,
              show_default=True, help='В какую область страницы вставлен фрагмент')
@output_options
@click.pass_context
def check(ctx, fragment, region, fmt, pretty, json_output, html_output, template_dir):
    """Проверить HTML-фрагмент из файла (или stdin)."""
    html = fragment.read()
    source = StaticPageSource(**{region: html}, name=getattr(fragment, 'name', 'Fragment'))
    try:
        report = _run_once(Auditor(ctx.obj['config'], source))
    except FetchFailed as e:
        print_error(f'Error: {e}')
    if report is not None:
        _emit(report, fmt, pretty, json_output, html_output, template_dir)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
