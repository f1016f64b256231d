# api/resolve_api.py
"""
HTTP API接口 for ENS resolution

Usage:
  python -m api.resolve_api

API Endpoints:
  GET /health                              - 健康检查
  GET /networks                            - 支持的网络与链
  GET /resolve/<domain>?network=mainnet    - 域名 → 地址 / 多链地址 / 文本记录
  GET /domain/<domain>?network=mainnet     - 域名详情
  GET /reverse/<address>?network=mainnet   - 地址 → 域名
"""
from __future__ import annotations

import traceback
from datetime import datetime, timezone

from flask import Flask, request, jsonify

from configs.coin_registry import list_supported_chains
from core.errors import FormatError, UnsupportedNetwork
from core.resolver import ENSResolver, default_network

app = Flask(__name__)

resolver = ENSResolver()


def _network() -> str:
    return request.args.get('network') or default_network()


def _error(error: str, message: str, status: int):
    return jsonify({
        "success": False,
        "error": error,
        "message": message
    }), status


def _guarded(handler):
    """FormatError / UnsupportedNetwork → 400，其余异常 → 500"""
    try:
        return handler()
    except FormatError as e:
        return _error("bad_request", str(e), 400)
    except UnsupportedNetwork as e:
        return _error("unsupported_network", str(e), 400)
    except Exception:
        app.logger.error(f"Unexpected error in resolve API: {traceback.format_exc()}")
        return _error("internal_server_error", "An unexpected error occurred", 500)


@app.route('/health', methods=['GET'])
def health_check():
    """健康检查接口"""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "ens-resolve-api",
        "supported_networks": resolver.supported_networks()
    })


@app.route('/networks', methods=['GET'])
def api_networks():
    """获取支持的网络及多链代码列表"""
    return jsonify({
        "success": True,
        "data": {
            "networks": resolver.supported_networks(),
            "chains": list_supported_chains()
        }
    })


@app.route('/resolve/<path:domain_name>', methods=['GET'])
def api_resolve(domain_name: str):
    """
    Response:
    {
        "success": true,
        "data": {"name": "vitalik.eth:btc", "address": "bc1q...", "network": "mainnet"}
    }
    """
    def handle():
        network = _network()
        address = resolver.resolve(domain_name, network)
        if not address:
            return _error("not_found", "Domain not found or not resolved", 404)
        return jsonify({
            "success": True,
            "data": {
                "name": domain_name,
                "address": address,
                "network": network
            }
        })
    return _guarded(handle)


@app.route('/domain/<path:domain_name>', methods=['GET'])
def api_domain(domain_name: str):
    def handle():
        info = resolver.domain_info(domain_name, _network())
        if info is None:
            return _error("not_found", "Domain not found", 404)
        return jsonify({
            "success": True,
            "data": info.to_dict()
        })
    return _guarded(handle)


@app.route('/reverse/<address>', methods=['GET'])
def api_reverse(address: str):
    def handle():
        # 仅支持 0x 开头的EVM地址
        if not address.startswith('0x'):
            return _error("bad_request", "Invalid address format", 400)
        network = _network()
        name = resolver.reverse_resolve(address, network)
        if not name:
            return _error("not_found", "No ENS name found for this address", 404)
        return jsonify({
            "success": True,
            "data": {
                "address": address,
                "name": name,
                "network": network
            }
        })
    return _guarded(handle)


@app.errorhandler(404)
def not_found(error):
    return _error("not_found", "Endpoint not found", 404)


@app.errorhandler(405)
def method_not_allowed(error):
    return _error("method_not_allowed", "Method not allowed", 405)


if __name__ == '__main__':
    # 开发环境运行
    app.run(
        host='127.0.0.1',
        port=3001,
        debug=True
    )
