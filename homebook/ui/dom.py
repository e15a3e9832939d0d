"""
Presentation Boundary

A minimal element tree standing in for the host page. Views read and
write element values, text, classes and data attributes, and subscribe
to events; they never deal with layout or styling.

Events bubble from the target up through its ancestors, which is what
makes delegated listeners work: a view attaches one click listener to a
list container and finds the clicked row with closest().

DESIGN DECISION: Markup is produced by Element.to_html() only, and it
escapes every text node and attribute value. User-supplied text can
therefore be stored raw on elements and is never interpolated into
markup by hand.
"""

import html
from collections import defaultdict
from typing import Callable, Iterator, Optional

EventHandler = Callable[["Event"], None]

VOID_TAGS = frozenset({"input", "br", "hr", "img"})


def escape_html(text: object) -> str:
    """Escape &, <, >, and both quote characters."""
    return html.escape(str(text), quote=True)


class Event:
    """A UI event travelling from its target up to the root."""

    def __init__(self, type: str, target: "Element"):
        self.type = type
        self.target = target
        self.current_target: Optional["Element"] = None
        self.default_prevented = False
        self._propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self._propagation_stopped = True

    @property
    def propagation_stopped(self) -> bool:
        return self._propagation_stopped


class Element:
    """One node of the presentation tree."""

    def __init__(
        self,
        tag: str = "div",
        id: Optional[str] = None,
        class_name: str = "",
        text_content: str = "",
        value: str = "",
        dataset: Optional[dict[str, str]] = None,
        attributes: Optional[dict[str, str]] = None,
        hidden: bool = False,
    ):
        self.tag = tag
        self.id = id
        self.class_name = class_name
        self.text_content = text_content
        self.value = value
        self.dataset: dict[str, str] = dict(dataset or {})
        self.attributes: dict[str, str] = dict(attributes or {})
        self.hidden = hidden
        self.children: list["Element"] = []
        self.parent: Optional["Element"] = None
        self._listeners: dict[str, list[EventHandler]] = defaultdict(list)

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<Element {self.tag}{ident} class={self.class_name!r}>"

    # -------------------- classes --------------------
    @property
    def classes(self) -> list[str]:
        return self.class_name.split()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        if not self.has_class(name):
            self.class_name = " ".join(self.classes + [name])

    def remove_class(self, name: str) -> None:
        self.class_name = " ".join(c for c in self.classes if c != name)

    def toggle_class(self, name: str, force: Optional[bool] = None) -> None:
        add = not self.has_class(name) if force is None else force
        if add:
            self.add_class(name)
        else:
            self.remove_class(name)

    # -------------------- tree --------------------
    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.remove()
        child.parent = self
        self.children.append(child)
        return child

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def clear_children(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    def iter_descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find(self, predicate: Callable[["Element"], bool]) -> Optional["Element"]:
        return next((el for el in self.iter_descendants() if predicate(el)), None)

    def find_all(self, predicate: Callable[["Element"], bool]) -> list["Element"]:
        return [el for el in self.iter_descendants() if predicate(el)]

    def query_by_class(self, name: str) -> Optional["Element"]:
        return self.find(lambda el: el.has_class(name))

    def closest(
        self,
        tag: Optional[str] = None,
        data_key: Optional[str] = None,
    ) -> Optional["Element"]:
        """Nearest element, starting with self, matching tag and/or data key."""
        node: Optional[Element] = self
        while node is not None:
            if (tag is None or node.tag == tag) and (data_key is None or data_key in node.dataset):
                return node
            node = node.parent
        return None

    # -------------------- events --------------------
    def add_event_listener(self, type: str, handler: EventHandler) -> None:
        self._listeners[type].append(handler)

    def listener_count(self, type: str) -> int:
        return len(self._listeners.get(type, ()))

    def dispatch_event(self, event: Event) -> Event:
        node: Optional[Element] = self
        while node is not None and not event.propagation_stopped:
            event.current_target = node
            for handler in list(node._listeners.get(event.type, ())):
                handler(event)
            node = node.parent
        return event

    def click(self) -> Event:
        return self.dispatch_event(Event("click", self))

    def submit(self) -> Event:
        return self.dispatch_event(Event("submit", self))

    def type_text(self, text: str) -> Event:
        """Set the value as if typed, then fire an input event."""
        self.value = text
        return self.dispatch_event(Event("input", self))

    # -------------------- markup --------------------
    def _attribute_pairs(self) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        if self.id:
            pairs.append(("id", self.id))
        if self.class_name:
            pairs.append(("class", self.class_name))
        for key, val in self.dataset.items():
            pairs.append((f"data-{key.replace('_', '-')}", val))
        pairs.extend(self.attributes.items())
        if self.tag == "input":
            pairs.append(("value", self.value))
        return pairs

    def to_html(self) -> str:
        attrs = "".join(
            f' {name}="{escape_html(val)}"' for name, val in self._attribute_pairs()
        )
        if self.hidden:
            attrs += " hidden"
        if self.tag in VOID_TAGS:
            return f"<{self.tag}{attrs}>"
        inner = escape_html(self.text_content) + "".join(c.to_html() for c in self.children)
        return f"<{self.tag}{attrs}>{inner}</{self.tag}>"


class Document:
    """Root of a presentation tree, with id lookup."""

    def __init__(self):
        self.body = Element("body")

    def get_element_by_id(self, element_id: str) -> Optional[Element]:
        return self.body.find(lambda el: el.id == element_id)

    def query_all_by_class(self, name: str) -> list[Element]:
        return self.body.find_all(lambda el: el.has_class(name))

    def to_html(self) -> str:
        return self.body.to_html()
