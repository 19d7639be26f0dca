"""
Directive renderer

Turns a built Directive into stream markup. Content is produced by the
template-render collaborator (template references) or taken verbatim
(inline content); the renderer itself only assembles the element.
"""

import html
from typing import Any, Dict, Optional

from ..config import appsettings, AppSettings
from ..models.directives import Directive, InlineContent, StreamAction, TemplateReference
from ..models.entity import TemplateRenderer
from ..models.errors import MissingActionError, MissingContentError
from .log import LOG


def directive_validate(directive: Directive) -> None:
    """
    Check that a directive can be rendered

    Raises:
        MissingActionError: If no action was set
        MissingContentError: If a non-remove directive has no content
    """
    if not directive.action:
        raise MissingActionError.missingAction()
    if directive.action != StreamAction.REMOVE.value and not directive.content_has():
        raise MissingContentError.missingView()


class DirectiveRenderer:
    """
    Renders directives through a template-render collaborator

    Attributes:
        templates: Object exposing render(name, data) -> str
        settings: AppSettings providing tag names and indentation
    """

    def __init__(self, templates: Optional[TemplateRenderer] = None, settings: Optional[AppSettings] = None) -> None:
        if templates is None:
            from .views import ViewRegistry
            templates = ViewRegistry()
        self.templates = templates
        self.settings = settings or appsettings

    def params_assemble(self, directive: Directive) -> Dict[str, Any]:
        """Collect the parameters the stream element is rendered from"""
        content = directive.content
        return {
            'action': directive.action,
            'target': directive.target,
            'targets': directive.targets,
            'partial': content.name if isinstance(content, TemplateReference) else None,
            'partialData': content.data if isinstance(content, TemplateReference) else {},
            'content': content if isinstance(content, InlineContent) else None,
        }

    def content_render(self, params: Dict[str, Any]) -> Optional[str]:
        if params['partial']:
            return self.templates.render(params['partial'], params['partialData'])
        if params['content'] is not None:
            return self.inline_render(params['content'])
        return None

    def inline_render(self, content: InlineContent) -> str:
        """
        Text of inline content

        Literal strings are used as-is. Safe fragments are rendered now, at
        render time, so a view registered after the builder call still resolves.
        """
        fragment = content.value
        if not content.safe or isinstance(fragment, str):
            return fragment
        if callable(getattr(fragment, 'render', None)):
            return fragment.render()
        return fragment.__html__()

    def directive_render(self, directive: Directive) -> str:
        """
        Render one directive to markup

        Raises:
            MissingActionError, MissingContentError: See directive_validate
        """
        directive_validate(directive)
        params = self.params_assemble(directive)
        body = self.content_render(params) if params['action'] != StreamAction.REMOVE.value else None
        markup = self.element_format(params, body)
        LOG(f"Rendered '{params['action']}' stream ({len(markup)} chars)", level=2)
        return markup

    def element_format(self, params: Dict[str, Any], body: Optional[str]) -> str:
        tag = self.settings.stream_tag
        attributes = []
        if params['targets'] is not None:
            attributes.append(f'targets="{html.escape(params["targets"], quote=True)}"')
        elif params['target'] is not None:
            attributes.append(f'target="{html.escape(params["target"], quote=True)}"')
        attributes.append(f'action="{html.escape(params["action"], quote=True)}"')
        opening = f"<{tag} {' '.join(attributes)}>"

        if body is None:
            return f"{opening}</{tag}>"

        pad = ' ' * self.settings.indent
        wrapper = self.settings.template_tag
        return (
            f"{opening}\n"
            f"{pad}<{wrapper}>\n"
            f"{pad * 2}{body.strip()}\n"
            f"{pad}</{wrapper}>\n"
            f"</{tag}>"
        )
