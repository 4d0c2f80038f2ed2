from .app import Pangea
from .component import MODAL_CONTAINER_PROP, Component, Message, Modal
from .container import Container
from .env import env
from .errors import (
	ModalSessionError,
	PangeaError,
	RegistrationError,
	RenderError,
	SerializationError,
)
from .host import DAppHost, FunctionRegistrar, Host
from .registry import Callback, FunctionRegistry
from .renderer import ModalSession, render_message, render_modal
from .serializer import Serializer, to_json
from .tags import Button, Image, ScrollView, Text, TextInput, View, define_tag
from .vdom import (
	ComponentNode,
	FunctionComponent,
	Node,
	SerializedElement,
	SerializedRoot,
	component,
)

__all__ = [
	# Facade
	"Pangea",
	# Components
	"Component",
	"Message",
	"Modal",
	"MODAL_CONTAINER_PROP",
	"component",
	"FunctionComponent",
	"ComponentNode",
	"Node",
	"Container",
	# Tags
	"define_tag",
	"View",
	"Text",
	"Button",
	"Image",
	"TextInput",
	"ScrollView",
	# Rendering
	"Serializer",
	"SerializedElement",
	"SerializedRoot",
	"to_json",
	"render_message",
	"render_modal",
	"ModalSession",
	# Host
	"Host",
	"DAppHost",
	"FunctionRegistrar",
	"FunctionRegistry",
	"Callback",
	# Errors
	"PangeaError",
	"RenderError",
	"RegistrationError",
	"SerializationError",
	"ModalSessionError",
	# Settings
	"env",
]
