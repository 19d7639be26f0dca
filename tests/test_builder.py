"""
Stream builder tests

Tests destination exclusivity, action resets, content derivation, the
entity factory, and the rendered markup.
"""

import pytest

from turbostream.lib.builder import StreamBuilder
from turbostream.models.directives import InlineContent, StreamAction, TemplateReference
from turbostream.models.errors import MissingActionError, MissingContentError, ViewNotFoundError


class TestDestinations:
    """Test target/targets mutual exclusivity"""

    def test_target_then_targets(self):
        """targets() clears target"""
        builder = StreamBuilder().target("item_1").targets(".items")
        assert builder.directive.target is None
        assert builder.directive.targets == ".items"

    def test_targets_then_target(self):
        """target() clears targets"""
        builder = StreamBuilder().targets(".items").target("item_1")
        assert builder.directive.target == "item_1"
        assert builder.directive.targets is None

    def test_target_entity(self, record_make):
        """Entity target resolves to its DOM id, or collection id when asked"""
        assert StreamBuilder().target(record_make(pk=2)).directive.target == "test_model_2"
        assert StreamBuilder().target(record_make(), asCollection=True).directive.target == "test_models"

    def test_targets_entity(self, record_make):
        """Entity targets resolve to the collection id"""
        assert StreamBuilder().targets(record_make()).directive.targets == "test_models"

    def test_chain_returns_same_builder(self):
        """Every setter returns the builder itself"""
        builder = StreamBuilder()
        assert builder.target("a") is builder
        assert builder.action("update") is builder
        assert builder.view("flash") is builder
        assert builder.content("x") is builder


class TestContentSource:
    """Test that view and inline content replace each other"""

    def test_view_replaces_inline(self):
        """view() after content() leaves only the template reference"""
        builder = StreamBuilder().content("<p>x</p>").view("flash", {"message": "hi"})
        assert builder.directive.content == TemplateReference("flash", {"message": "hi"})

    def test_inline_replaces_view(self):
        """content() after view() leaves only inline content"""
        builder = StreamBuilder().partial("flash").content("<p>x</p>")
        assert builder.directive.content == InlineContent("<p>x</p>")

    def test_partial_is_view_alias(self):
        """partial() sets the same template reference as view()"""
        assert StreamBuilder().partial("flash", {"a": 1}).directive.content == \
            StreamBuilder().view("flash", {"a": 1}).directive.content

    def test_action_enum_normalized(self):
        """StreamAction values are stored as plain strings"""
        assert StreamBuilder().action(StreamAction.UPDATE).directive.action == "update"


class TestActionShortcuts:
    """Test the per-action methods"""

    def test_second_action_wins_entirely(self, record_make):
        """Action methods reset action, target and content"""
        builder = StreamBuilder().append(record_make(), "<p>a</p>").remove("item_9")
        assert builder.directive.action == "remove"
        assert builder.directive.target == "item_9"
        assert builder.directive.targets is None
        assert builder.directive.content is None

    def test_action_clears_targets(self):
        """Single-target action after a multi-target one clears targets"""
        builder = StreamBuilder().appendAll(".items", "x").update("item_1", "y")
        assert builder.directive.targets is None
        assert builder.directive.target == "item_1"

    @pytest.mark.parametrize("method", ["append", "update", "replace"])
    def test_content_derived_from_entity(self, record_make, method):
        """append/update/replace derive the entity partial"""
        entity = record_make()
        builder = getattr(StreamBuilder(), method)(entity)
        assert builder.directive.content == TemplateReference("test_models/_test_model", {"testModel": entity})

    @pytest.mark.parametrize("method", ["prepend", "before", "after"])
    def test_content_not_derived(self, record_make, method):
        """Other actions leave content unset"""
        builder = getattr(StreamBuilder(), method)(record_make())
        assert builder.directive.content is None

    def test_explicit_content_beats_derivation(self, record_make):
        """Explicit content is used even with an entity destination"""
        builder = StreamBuilder().replace(record_make(), "<p>custom</p>")
        assert builder.directive.content == InlineContent("<p>custom</p>")

    def test_string_destination_never_derives(self):
        """A string destination has nothing to derive from"""
        assert StreamBuilder().append("comments").directive.content is None

    @pytest.mark.parametrize("method, expected", [
        ("append", "test_models"),
        ("prepend", "test_models"),
        ("before", "test_model_4"),
        ("after", "test_model_4"),
        ("update", "test_model_4"),
        ("replace", "test_model_4"),
        ("remove", "test_model_4"),
    ])
    def test_entity_target_resolution(self, record_make, method, expected):
        """append/prepend target the collection, others the instance"""
        builder = getattr(StreamBuilder(), method)(record_make(pk=4))
        assert builder.directive.action == method
        assert builder.directive.target == expected


class TestCollectionShortcuts:
    """Test the *All variants"""

    @pytest.mark.parametrize("method, action", [
        ("appendAll", "append"),
        ("prependAll", "prepend"),
        ("beforeAll", "before"),
        ("afterAll", "after"),
        ("updateAll", "update"),
        ("replaceAll", "replace"),
    ])
    def test_sets_targets(self, method, action):
        """Collection variants set targets only"""
        builder = getattr(StreamBuilder(), method)(".items", "<p>x</p>")
        assert builder.directive.action == action
        assert builder.directive.target is None
        assert builder.directive.targets == ".items"
        assert builder.directive.content == InlineContent("<p>x</p>")

    def test_no_content_derived(self, record_make):
        """Entity destination resolves to the collection id without content"""
        builder = StreamBuilder().replaceAll(record_make())
        assert builder.directive.targets == "test_models"
        assert builder.directive.content is None

    def test_resets_previous_content(self):
        """A previous view does not survive an *All call"""
        builder = StreamBuilder().view("flash").removeAll(".items")
        assert builder.directive.content is None
        assert builder.directive.action == "remove"


class TestForEntity:
    """Test the classifier-driven factory"""

    def test_created(self, record_make):
        """Created entity appends to its collection"""
        builder = StreamBuilder.forEntity(record_make(just_created=True))
        assert builder.directive.action == "append"
        assert builder.directive.target == "test_models"
        assert builder.directive.targets is None

    def test_created_with_override(self, record_make):
        """Override action applies"""
        assert StreamBuilder.forEntity(record_make(just_created=True), "prepend").directive.action == "prepend"

    def test_updated(self, record_make):
        """Updated entity replaces itself"""
        builder = StreamBuilder.forEntity(record_make(pk=8))
        assert builder.directive.action == "replace"
        assert builder.directive.target == "test_model_8"

    def test_deleted(self, record_make):
        """Deleted entity is removed"""
        builder = StreamBuilder.forEntity(record_make(pk=8, persisted=False))
        assert builder.directive.action == "remove"
        assert builder.directive.content is None


class TestMarkup:
    """Test rendering to markup"""

    def test_created_entity_markup(self, record_make, views):
        """Created entity renders the append stream around its partial"""
        entity = record_make(pk=1, just_created=True)
        expected = (
            '<turbo-stream target="test_models" action="append">\n'
            '    <template>\n'
            '        <div id="test_model_1">hello</div>\n'
            '    </template>\n'
            '</turbo-stream>'
        )
        assert StreamBuilder.forEntity(entity, templates=views).toMarkup() == expected

    def test_updated_entity_markup(self, record_make, views):
        """Updated entity renders a replace of its DOM id"""
        markup = StreamBuilder.forEntity(record_make(pk=1), templates=views).toMarkup()
        assert markup.startswith('<turbo-stream target="test_model_1" action="replace">')
        assert '<div id="test_model_1">hello</div>' in markup

    def test_deleted_entity_markup(self, record_make):
        """Remove renders an empty element"""
        markup = StreamBuilder.forEntity(record_make(pk=1, persisted=False)).toMarkup()
        assert markup == '<turbo-stream target="test_model_1" action="remove"></turbo-stream>'

    def test_targets_markup(self):
        """Collection variants write the targets attribute"""
        markup = StreamBuilder().updateAll(".items", "<b>x</b>").toMarkup()
        assert markup.startswith('<turbo-stream targets=".items" action="update">')
        assert 'target="' not in markup

    def test_attributes_escaped(self):
        """Attribute values are HTML-escaped"""
        markup = StreamBuilder().remove('a"b').toMarkup()
        assert 'target="a&quot;b"' in markup

    def test_inline_content_used_as_is(self):
        """Literal content is not escaped"""
        assert "<b>bold</b>" in StreamBuilder().append("list", "<b>bold</b>").toMarkup()

    def test_fragment_content_kept_unrendered(self, views):
        """A bound view is stored as a safe fragment and rendered with the directive"""
        fragment = views.view("flash", {"message": "Saved"})
        builder = StreamBuilder().update("flash", fragment)
        assert builder.directive.content == InlineContent(fragment, safe=True)
        assert "<p>Saved</p>" in builder.toMarkup()

    def test_fragment_view_registered_later(self, views):
        """The setter does not render; a view registered afterwards resolves"""
        builder = StreamBuilder(templates=views).append("comments", views.view("comments/_comment", {"body": "Hi"}))

        @views.view_register("comments/_comment")
        def comment(data):
            return f"<li>{data['body']}</li>"

        assert "<li>Hi</li>" in builder.toMarkup()

    def test_fragment_missing_view_fails_at_render(self, views):
        """An unknown fragment view fails only when rendering"""
        builder = StreamBuilder().content(views.view("nope")).target("a").action("update")
        with pytest.raises(ViewNotFoundError):
            builder.toMarkup()

    def test_html_fragment(self):
        """Objects exposing __html__ are used as markup"""
        class Markup:
            def __html__(self):
                return "<em>safe</em>"

        builder = StreamBuilder().update("a", Markup())
        assert builder.directive.content.safe is True
        assert "<em>safe</em>" in builder.toMarkup()

    def test_literal_content_not_safe(self):
        """Strings are stored as literal, non-fragment content"""
        assert StreamBuilder().update("a", "<i>x</i>").directive.content.safe is False

    def test_view_content(self, views):
        """Template reference renders through the collaborator"""
        markup = StreamBuilder(templates=views).target("flash").action("update") \
            .partial("layouts/_flash", {"message": "Hi"}).toMarkup()
        assert "<p>Hi</p>" in markup

    def test_missing_view(self):
        """Unknown view names fail loudly"""
        with pytest.raises(ViewNotFoundError):
            StreamBuilder().update("flash").view("nope").toMarkup()

    def test_str_renders(self):
        """str() of a builder is its markup"""
        builder = StreamBuilder().remove("item_1")
        assert str(builder) == builder.toMarkup()


class TestValidation:
    """Test render-time validation"""

    def test_remove_needs_no_content(self):
        """Remove renders without content"""
        StreamBuilder().remove("item_1").toMarkup()
        StreamBuilder().removeAll(".items").toMarkup()

    @pytest.mark.parametrize("action", ["append", "prepend", "before", "after", "update", "replace", "morph"])
    def test_missing_content(self, action):
        """Any other action without content raises"""
        with pytest.raises(MissingContentError):
            StreamBuilder().target("item_1").action(action).toMarkup()

    def test_empty_inline_content_is_missing(self):
        """An empty string is not content"""
        with pytest.raises(MissingContentError):
            StreamBuilder().append("items", "").toMarkup()

    def test_content_after_destination(self):
        """Content may be attached after the destination in any order"""
        builder = StreamBuilder().append("items")
        builder.content("<li>x</li>")
        assert "<li>x</li>" in builder.toMarkup()

    def test_missing_action(self):
        """A builder without any action cannot render"""
        with pytest.raises(MissingActionError):
            StreamBuilder().target("item_1").content("x").toMarkup()
