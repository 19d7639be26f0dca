"""
Entity change classification

Decides the default stream directive for an entity from its lifecycle
flags. Policy, first match wins:

    1. missing or soft-deleted -> remove, singular target, no content
    2. just created            -> append (or override), collection target
    3. otherwise (updated)     -> replace (or override), singular target

Soft-deleted entities are streamed exactly like deleted ones. Callers that
need to tell them apart build the directive explicitly instead.
"""

from typing import Optional, Union

from ..models.directives import Classification, StreamAction, action_normalize
from ..models.entity import Naming, StreamableEntity
from .naming import TargetResolver
from .log import LOG


def entity_isGone(entity: StreamableEntity) -> bool:
    """True when the entity is not persisted or is soft-deleted"""
    return not entity.exists() or entity.isSoftDeleted()


def entity_classify(
    entity: StreamableEntity,
    action: Optional[Union[str, StreamAction]] = None,
    naming: Optional[Naming] = None,
) -> Classification:
    """
    Classify an entity change into a default directive

    Args:
        entity: Entity whose current state should be streamed
        action: Override for the created/updated branches; ignored for
                removed entities
        naming: Naming collaborator (defaults to ConventionNaming)

    Returns:
        Classification with action, target mode, resolved target and
        derived template reference

    Example:
        >>> entity_classify(new_comment).action
        'append'
        >>> entity_classify(new_comment, action='prepend').target
        'comments'
    """
    resolver = TargetResolver(naming)
    override = action_normalize(action) if action else None

    if entity_isGone(entity):
        classification = Classification(
            action=StreamAction.REMOVE.value,
            collection=False,
            target=resolver.resolve(entity),
        )
    elif entity.wasJustCreated():
        classification = Classification(
            action=override or StreamAction.APPEND.value,
            collection=True,
            target=resolver.resolve(entity, asCollection=True),
            content=resolver.naming.templateReferenceFor(entity),
        )
    else:
        classification = Classification(
            action=override or StreamAction.REPLACE.value,
            collection=False,
            target=resolver.resolve(entity),
            content=resolver.naming.templateReferenceFor(entity),
        )

    LOG(
        f"Classified {entity.typeName()} as '{classification.action}' -> '{classification.target}'",
        level=2,
    )
    return classification
