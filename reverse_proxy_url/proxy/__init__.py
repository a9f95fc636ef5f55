from .middleware import ReverseProxyMiddleware

__all__ = ["ReverseProxyMiddleware"]
