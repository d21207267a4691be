"""
CLI 模块

命令行接口实现。所有错误在这里统一转换为退出码。
"""

import asyncio

import click
from loguru import logger

from podpatcher import __version__
from podpatcher.exceptions import PodPatcherError
from podpatcher.logger import setup_logger
from podpatcher.models import PatcherConfig
from podpatcher.orchestrator import PatchOrchestrator, PatchResult
from podpatcher.progress import ProgressReporter


async def run_async(config: PatcherConfig) -> PatchResult:
    """异步运行"""
    orchestrator = PatchOrchestrator(config, reporter=ProgressReporter())
    return await orchestrator.run()


@click.command()
@click.argument("pod_dir", type=click.Path(file_okay=False))
@click.option("-force", "--force", "force", is_flag=True, help="强制重新下载所有已存在的文件")
@click.option("--dry-run", is_flag=True, help="干运行模式（只列出需要更新的文件）")
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, pod_dir: str, force: bool, dry_run: bool, debug: bool):
    """PodPatcher - Path of Diablo 文件更新工具"""
    setup_logger(debug=debug)

    config = PatcherConfig(pod_dir=pod_dir, force=force, dry_run=dry_run)
    try:
        asyncio.run(run_async(config))
    except PodPatcherError as e:
        logger.error(f"更新失败: {e}")
        ctx.exit(e.exit_code)
    except Exception as e:
        logger.exception(f"运行时错误: {e}")
        ctx.exit(1)


if __name__ == "__main__":
    main()
