from .errors import (
    ConfigurationError,
    ConflictError,
    DepthLimitError,
    HateoasError,
    LinkNotFoundError,
    MissingParameterError,
)
from .models.action import ActionEntry, ActionField, RequestDescription
from .models.link import LinkEntry, LinkTarget
from .models.node import Node, NodeList, TransformedKind, kind_of
from .services.actions import BoundAction
from .services.http import HttpxResource, HttpxResourceFactory
from .services.interceptor import HateoasInterceptor, InterceptorChain, ResponseEnvelope
from .services.transformer import HateoasTransformer, configure, get_transformer, transform

__version__ = "0.1.0"
