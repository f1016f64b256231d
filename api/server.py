# api/server.py
"""
ENS resolve HTTP API 服务器

Usage:
    python -m api.server

    或者直接运行:
    python api/server.py
"""
import os
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# 加载环境变量（需在导入app之前，网络配置在导入时读取）
load_dotenv()

from api.resolve_api import app
from core.logger import get_logger


def main():
    host = os.getenv('API_HOST', '127.0.0.1')
    port = int(os.getenv('API_PORT', 3001))
    debug = os.getenv('API_DEBUG', 'false').lower() == 'true'

    logger = get_logger()
    logger.info(f"🚀 ENS API Server running on http://{host}:{port} (debug={debug})")
    logger.info(f"📡 Health check: http://{host}:{port}/health")
    logger.info("📋 GET /resolve/<domain>?network=mainnet")
    logger.info("📋 GET /domain/<domain>?network=mainnet")
    logger.info("📋 GET /reverse/<address>?network=mainnet")

    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        logger.info("👋 API服务器已停止")


if __name__ == '__main__':
    main()
