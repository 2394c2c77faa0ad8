from .detector import FormatDetectorProtocol
from .logging import LoggerFactoryProtocol
from .matcher import IgnoreMatcherProtocol
from .render import RendererProtocol, WriterProtocol
from .walker import NodeVisitorProtocol, WalkerProtocol

__all__ = [
    'FormatDetectorProtocol',
    'IgnoreMatcherProtocol',
    'LoggerFactoryProtocol',
    'NodeVisitorProtocol',
    'RendererProtocol',
    'WalkerProtocol',
    'WriterProtocol',
]
