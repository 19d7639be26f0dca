"""
Naming conventions and target resolution

ConventionNaming derives DOM ids, collection ids and partial names from an
entity's type name and primary key. TargetResolver turns a destination
(explicit string or entity) into the identifier written to the markup.

Example:
    >>> naming = ConventionNaming()
    >>> naming.singularIdentifierFor(comment)      # Comment, pk=7
    'comment_7'
    >>> naming.pluralIdentifierFor(comment)
    'comments'
    >>> naming.templateReferenceFor(comment)
    TemplateReference(name='comments/_comment', data={'comment': comment})
"""

import re
from typing import Any, Dict, Optional

from ..config import appsettings, AppSettings
from ..models.directives import Destination, EntityTarget, ExplicitTarget, TemplateReference, destination_wrap
from ..models.entity import Naming, StreamableEntity
from .log import LOG


IRREGULAR_PLURALS: Dict[str, str] = {
    'person': 'people',
    'child': 'children',
    'man': 'men',
    'woman': 'women',
    'mouse': 'mice',
    'goose': 'geese',
    'tooth': 'teeth',
    'foot': 'feet',
}

UNCOUNTABLE: set = {'equipment', 'information', 'money', 'news', 'series', 'sheep', 'species', 'fish'}


def snake_case(name: str) -> str:
    """
    Convert a class-style type name to snake_case

    Module qualifiers are dropped ("app.models.TestModel" -> "test_model").

    Example:
        >>> snake_case('HTTPRequestLog')
        'http_request_log'
    """
    name = name.rsplit('.', 1)[-1]
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
    return name.replace('-', '_').lower()


def word_pluralize(word: str) -> str:
    """Pluralize a single lowercase English word"""
    if not word or word in UNCOUNTABLE:
        return word
    if word in IRREGULAR_PLURALS:
        return IRREGULAR_PLURALS[word]
    if re.search(r'[^aeiou]y$', word):
        return word[:-1] + 'ies'
    if re.search(r'(s|x|z|ch|sh)$', word):
        return word + 'es'
    return word + 's'


def camel_case(snake: str) -> str:
    """
    Convert a snake_case name to camelCase

    Example:
        >>> camel_case('test_model')
        'testModel'
    """
    head, *rest = snake.split('_')
    return head + ''.join(word.capitalize() for word in rest)


def name_pluralize(singular: str) -> str:
    """
    Pluralize the last word of a snake_case name

    Example:
        >>> name_pluralize('blog_category')
        'blog_categories'
    """
    head, _, last = singular.rpartition('_')
    plural = word_pluralize(last)
    return f"{head}_{plural}" if head else plural


class ConventionNaming:
    """
    Default Naming collaborator

    Attributes:
        settings: AppSettings providing id delimiter and new-record prefix
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings

    def singularNameFor(self, entity: StreamableEntity) -> str:
        return snake_case(entity.typeName())

    def pluralNameFor(self, entity: StreamableEntity) -> str:
        return name_pluralize(self.singularNameFor(entity))

    def elementNameFor(self, entity: StreamableEntity) -> str:
        return camel_case(self.singularNameFor(entity))

    def singularIdentifierFor(self, entity: StreamableEntity) -> str:
        """
        DOM id of one entity instance

        Stable for the same type and primary key. Entities without a
        primary key get the new-record id (e.g., "create_comment").
        """
        singular = self.singularNameFor(entity)
        key = entity.primaryKey()
        if key is None:
            return self.settings.newRecordId_make(singular)
        return self.settings.domId_make(singular, key)

    def pluralIdentifierFor(self, entity: StreamableEntity) -> str:
        """Collection id of the entity's type (e.g., "comments")"""
        return self.pluralNameFor(entity)

    def templateReferenceFor(self, entity: StreamableEntity) -> TemplateReference:
        """
        Partial that renders one entity

        Defaults to "<plural>/_<singular>" with the entity bound under its
        camelCase element name (TestModel -> "testModel"). An entity
        exposing partialName() overrides the name.
        """
        singular = self.singularNameFor(entity)
        partial_name = getattr(entity, 'partialName', None)
        if callable(partial_name):
            name = partial_name()
        else:
            name = f"{self.pluralNameFor(entity)}/_{singular}"
        return TemplateReference(name=name, data={self.elementNameFor(entity): entity})


class TargetResolver:
    """
    Resolves destinations into identifier strings

    Explicit identifiers are returned unchanged; entity destinations are
    resolved through the Naming collaborator.
    """

    def __init__(self, naming: Optional[Naming] = None) -> None:
        self.naming: Naming = naming or ConventionNaming()

    def resolve(self, target: Any, asCollection: bool = False) -> str:
        """
        Resolve a destination to an identifier

        Args:
            target: A string, an entity, or a Destination variant
            asCollection: For entities, use the plural collection id

        Returns:
            Identifier string to write into the target/targets attribute
        """
        destination: Destination = destination_wrap(target, collection=asCollection)

        if isinstance(destination, ExplicitTarget):
            return destination.value

        resolved = self.destination_resolve(destination, asCollection)
        LOG(f"Resolved {destination.entity.typeName()} target to '{resolved}'", level=3)
        return resolved

    def destination_resolve(self, destination: EntityTarget, asCollection: bool) -> str:
        if asCollection or destination.collection:
            return self.naming.pluralIdentifierFor(destination.entity)
        return self.naming.singularIdentifierFor(destination.entity)
