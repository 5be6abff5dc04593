from .action import ActionEntry, ActionField, RequestDescription
from .link import LinkEntry, LinkIndex, LinkTarget
from .node import Node, NodeList, TransformedKind, kind_of
