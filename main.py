"""
Main entry point for the Quote Service.
Provides command-line interface and server startup.
"""

import argparse
from typing import Any, Dict, Optional

import uvicorn

from utils import main_logger, api_logger, config_manager

# reload 和多 worker 模式下 uvicorn 需要通过导入字符串加载应用
API_APP_IMPORT = "api.app:app"


class QuoteService:
    """报价服务主类"""

    def __init__(self):
        self.config = config_manager

    def build_server_settings(self, host: Optional[str] = None,
                              port: Optional[int] = None) -> Dict[str, Any]:
        """合并命令行参数与 api_config，生成 uvicorn 启动参数"""
        api_config = self.config.get_api_config()

        # 命令行参数优先于配置文件
        settings = {
            "app": API_APP_IMPORT,
            "host": host if host is not None else api_config.host,
            "port": port if port is not None else api_config.port,
            "reload": api_config.reload,
            "log_level": "info"
        }
        # uvicorn 不支持同时开启 reload 和多 worker
        if not api_config.reload:
            settings["workers"] = api_config.workers

        return settings

    def start_api_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """启动API服务器"""
        settings = self.build_server_settings(host, port)

        api_logger.info(f"[Main] Starting API server on {settings['host']}:{settings['port']}...")
        api_logger.info(f"[Main] API config - workers: {settings.get('workers', 1)}, reload: {settings['reload']}")

        try:
            uvicorn.run(**settings)
        except Exception as e:
            api_logger.error(f"[Main] API server error: {e}")
            raise


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Quote Service - in-memory quote CRUD API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py api                             # 使用配置文件中的地址启动API服务器
  python main.py api --host 127.0.0.1 --port 9000  # 指定监听地址
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    api_parser = subparsers.add_parser('api', help='启动API服务器')
    api_parser.add_argument('--host', default=None, help='监听地址 (默认取 api_config.host)')
    api_parser.add_argument('--port', type=int, default=None, help='监听端口 (默认取 api_config.port)')

    return parser


def main(argv=None):
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    service = QuoteService()

    if args.command == 'api':
        service.start_api_server(host=args.host, port=args.port)


def run():
    """命令行入口"""
    try:
        main()
    except KeyboardInterrupt:
        main_logger.info("[Main] Interrupted by user, exiting")


if __name__ == "__main__":
    run()
