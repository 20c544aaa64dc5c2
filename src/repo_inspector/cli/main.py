"""Main CLI for repo-inspector."""

import json
import os
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import dotenv_values
from pydantic import ValidationError
from rich.console import Console
from yaml import YAMLError

from ..analyzers import LintAnalyzer, SecurityAnalyzer, TypeErrorAnalyzer
from ..analyzers.base import AnalysisReport, RepositoryAnalyzer
from ..core.config import InspectorConfig, load_config
from ..errors import ErrorTranslator, InspectorError, MissingCredentialError
from ..integrations.github.client import GitHubClient
from ..safeguards.rate_limiter import RateLimiter
from ..utils.rich_logging import setup_rich_logging
from ..utils.validators import validate_branch_name, validate_owner, validate_repo_name
from .report import render_critical, render_report


console = Console()

TOKEN_ENV_VAR = "GITHUB_TOKEN"


def resolve_token(
    token: Optional[str],
    config: InspectorConfig,
    env_file: str = ".env",
) -> Optional[str]:
    """Pick the GitHub token: --token, then $GITHUB_TOKEN, then .env, then config."""
    if token:
        return token
    if os.environ.get(TOKEN_ENV_VAR):
        return os.environ[TOKEN_ENV_VAR]
    file_token = dotenv_values(env_file).get(TOKEN_ENV_VAR)
    if file_token:
        return file_token
    return config.github.token


def _fail(error: Exception) -> None:
    translator = ErrorTranslator()
    console.print(translator.format_for_cli(translator.translate(error)))
    sys.exit(1)


def _get_config(ctx) -> InspectorConfig:
    # Subgroups also run standalone (lint-error, security-analyzer, type-error)
    ctx.ensure_object(dict)
    if "config" not in ctx.obj:
        ctx.obj["config"] = load_config()
        ctx.obj.setdefault("verbose", False)
    return ctx.obj["config"]


def _build_client(config: InspectorConfig, token: str) -> GitHubClient:
    limits = config.rate_limit
    rate_limiter = RateLimiter(
        max_requests=limits.max_requests,
        window_seconds=limits.window_seconds,
        min_interval=limits.min_interval,
    )
    return GitHubClient(
        token,
        rate_limiter=rate_limiter,
        base_url=config.github.base_url,
        max_retry_wait=limits.max_retry_wait,
    )


def _run_analysis(ctx, analyzer_cls, owner, repo, branch, token, max_files, **analyzer_kwargs) -> AnalysisReport:
    """Shared flow for every ``analyze`` command; exits 1 on any fatal error."""
    config = _get_config(ctx)
    branch = branch or config.analyzer.default_branch

    try:
        validate_owner(owner)
        validate_repo_name(repo)
        validate_branch_name(branch)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/]")
        sys.exit(1)

    resolved_token = resolve_token(token, config)
    if not resolved_token:
        _fail(MissingCredentialError())

    setup_rich_logging(
        log_level=config.log_level,
        verbose=ctx.obj.get("verbose", False),
        repository=f"{owner}/{repo}@{branch}",
    )

    client = _build_client(config, resolved_token)
    analyzer: RepositoryAnalyzer = analyzer_cls(
        client,
        max_files=max_files if max_files is not None else config.analyzer.max_files,
        skip_dirs=config.analyzer.skip_dirs,
        **analyzer_kwargs,
    )

    try:
        return analyzer.analyze_repository(owner, repo, branch)
    except InspectorError as e:
        _fail(e)


def analyze_options(f):
    """Options shared by every ``analyze`` command."""
    f = click.option("--max-files", type=click.IntRange(min=1), default=None, help="Max source files to analyze (default 50)")(f)
    f = click.option("--token", "-t", default=None, help="GitHub token (else $GITHUB_TOKEN or .env)")(f)
    f = click.option("--branch", "-b", default=None, help="Branch to analyze (default main)")(f)
    f = click.option("--repo", "-r", required=True, help="Repository name")(f)
    f = click.option("--owner", "-o", required=True, help="Repository owner")(f)
    return f


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(path_type=Path), default=None,
              help="YAML configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Show progress logs")
@click.pass_context
def cli(ctx, config_path, verbose):
    """repo-inspector - static analysis of GitHub repositories."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = load_config(config_path)
    except (ValidationError, YAMLError) as e:
        console.print(f"[red]Error: invalid configuration in {config_path}[/]\n{e}")
        sys.exit(1)
    ctx.obj["verbose"] = verbose


@cli.group()
def lint():
    """Lint error analysis."""


@lint.command("analyze")
@analyze_options
@click.pass_context
def lint_analyze(ctx, owner, repo, branch, token, max_files):
    """Analyze a repository for lint errors."""
    console.print(f"[bold]Analyzing lint errors in {owner}/{repo}...[/]")
    report = _run_analysis(ctx, LintAnalyzer, owner, repo, branch, token, max_files)

    render_report(console, report)
    console.print(
        f"\n[bold]Errors:[/] {report.total_errors}  "
        f"[bold]Warnings:[/] {report.total_warnings}  "
        f"[bold]Info:[/] {report.total_info}"
    )


@cli.group()
def security():
    """Security vulnerability analysis."""


@security.command("analyze")
@analyze_options
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def security_analyze(ctx, owner, repo, branch, token, max_files, as_json):
    """Analyze a repository for security vulnerabilities.

    Exits with status 1 when critical issues are found.
    """
    if not as_json:
        console.print(f"[bold]Analyzing security of {owner}/{repo}...[/]")
    report = _run_analysis(ctx, SecurityAnalyzer, owner, repo, branch, token, max_files)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(console, report)
        render_critical(console, report)

    if report.blocking_issues:
        if not as_json:
            console.print(f"\n[bold red]✗ {report.critical_count} critical issues found[/]")
        sys.exit(1)


@cli.group(name="types")
def types_group():
    """Type error analysis."""


@types_group.command("analyze")
@analyze_options
@click.option("--no-ci-annotations", is_flag=True, help="Skip type errors reported by CI check runs")
@click.pass_context
def types_analyze(ctx, owner, repo, branch, token, max_files, no_ci_annotations):
    """Analyze a repository for type errors."""
    console.print(f"[bold]Analyzing type errors in {owner}/{repo}...[/]")
    config = _get_config(ctx)
    report = _run_analysis(
        ctx, TypeErrorAnalyzer, owner, repo, branch, token, max_files,
        ci_annotations=config.analyzer.ci_annotations and not no_ci_annotations,
    )

    render_report(console, report)
    console.print(
        f"\n[bold]Errors:[/] {report.total_errors}  "
        f"[bold]Warnings:[/] {report.total_warnings}"
    )


if __name__ == "__main__":
    cli()
