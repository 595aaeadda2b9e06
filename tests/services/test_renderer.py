from spacetraveling.schemas.blog import (
    ListingState,
    ListingStatus,
    Navigation,
    NavigationPost,
    NavigationPostData,
    PostData,
    PostProps,
    PostSummary,
)
from spacetraveling.services.posts_service import to_post_detail
from spacetraveling.services.renderer import (
    EDIT_INFORMATION_CLASS,
    EXIT_PREVIEW_URL,
    PageRenderer,
)
from spacetraveling.settings import Settings
from tests.conftest import make_post_doc

CURSOR = "https://blog.cdn.prismic.io/api/v2/documents/search?ref=abc&page=2"


def listing(next_page=None, current_page=1):
    return ListingState(
        posts=(
            PostSummary(
                uid="how-to-use-hooks",
                first_publication_date="15 mar 2021",
                data=PostData(
                    title="Como utilizar Hooks",
                    subtitle="Pensando em sincronização",
                    author="Joseph Oliveira",
                ),
            ),
        ),
        next_page=next_page,
        current_page=current_page,
        status=ListingStatus.IDLE if next_page else ListingStatus.EXHAUSTED,
    )


def post_props(preview=False, navigation=None, **doc_overrides):
    return PostProps(
        post=to_post_detail(make_post_doc("current", **doc_overrides)),
        navigation=navigation or Navigation(),
        preview=preview,
    )


def nav_post(uid, title):
    return NavigationPost(uid=uid, data=NavigationPostData(title=title))


def test_home_lists_posts():
    html = PageRenderer().render_home(listing())

    assert "<title>Home | spacetraveling</title>" in html
    assert 'href="/post/how-to-use-hooks"' in html
    assert "Como utilizar Hooks" in html
    assert "Pensando em sincronização" in html
    assert "15 mar 2021" in html
    assert "Joseph Oliveira" in html


def test_home_hides_load_more_without_cursor():
    html = PageRenderer().render_home(listing(next_page=None))

    assert "Carregar mais posts" not in html


def test_home_load_more_button_targets_cursor():
    html = PageRenderer().render_home(listing(next_page=CURSOR, current_page=1))

    assert "Carregar mais posts" in html
    assert 'hx-get="/api/posts?cursor=' in html
    assert "page%3D2" in html
    assert "&amp;page=1" in html
    assert 'hx-disabled-elt="this"' in html


def test_exit_preview_link_follows_preview_flag():
    renderer = PageRenderer()

    assert EXIT_PREVIEW_URL in renderer.render_home(listing(), preview=True)
    assert EXIT_PREVIEW_URL not in renderer.render_home(listing(), preview=False)
    assert EXIT_PREVIEW_URL in renderer.render_post(post_props(preview=True))
    assert EXIT_PREVIEW_URL not in renderer.render_post(post_props(preview=False))


def test_post_items_fragment_has_no_page_chrome():
    html = PageRenderer().render_post_items(listing(next_page=CURSOR))

    assert "<html" not in html
    assert "Como utilizar Hooks" in html
    assert "Carregar mais posts" in html


def test_post_page_renders_sections_in_order():
    props = post_props(
        content=[
            {
                "heading": "Primeira",
                "body": [{"type": "paragraph", "text": "um", "spans": []}],
            },
            {
                "heading": "Segunda",
                "body": [
                    {
                        "type": "paragraph",
                        "text": "dois",
                        "spans": [{"start": 0, "end": 4, "type": "strong"}],
                    }
                ],
            },
        ]
    )

    html = PageRenderer().render_post(props)

    assert html.index("<h2>Primeira</h2>") < html.index("<h2>Segunda</h2>")
    assert "<p>um</p>" in html
    assert "<p><strong>dois</strong></p>" in html
    assert "<title>Current | spacetraveling</title>" in html
    assert 'src="https://images.prismic.io/current.png"' in html


def test_post_page_reading_time():
    words = " ".join(["palavra"] * 201)
    props = post_props(
        content=[{"heading": "", "body": [{"type": "paragraph", "text": words}]}]
    )

    context = PageRenderer().post_context(props)

    assert context["reading_time"] == "2 min"
    assert "2 min" in PageRenderer().render_post(props)


def test_post_page_with_no_words_reads_in_zero_minutes():
    context = PageRenderer().post_context(post_props(content=[]))

    assert context["reading_time"] == "0 min"


def test_edit_annotation_class_applied_when_never_edited():
    renderer = PageRenderer()

    unedited = renderer.post_context(post_props(last_publication_date=None))
    edited = renderer.post_context(post_props())

    assert unedited["edit_class"] == EDIT_INFORMATION_CLASS
    assert edited["edit_class"] is None
    assert f'class="{EDIT_INFORMATION_CLASS}"' in renderer.render_post(
        post_props(last_publication_date=None)
    )
    assert f'class="{EDIT_INFORMATION_CLASS}"' not in renderer.render_post(
        post_props()
    )


def test_edit_annotation_shows_last_publication():
    html = PageRenderer().render_post(
        post_props(last_publication_date="2021-03-25T19:27:35+0000")
    )

    assert "*editado em 25 mar 2021 às 19:27" in html


def test_navigation_links_only_when_present():
    renderer = PageRenderer()

    none = renderer.render_post(post_props())
    both = renderer.render_post(
        post_props(
            navigation=Navigation(
                prev_post=[nav_post("older", "Post antigo")],
                next_post=[nav_post("newer", "Post novo")],
            )
        )
    )
    only_next = renderer.render_post(
        post_props(navigation=Navigation(next_post=[nav_post("newer", "Post novo")]))
    )

    assert "Post anterior" not in none and "Próximo post" not in none
    assert 'href="/post/older"' in both and "Post antigo" in both
    assert 'href="/post/newer"' in both and "Post novo" in both
    assert "Post anterior" not in only_next
    assert "Próximo post" in only_next


def test_comments_widget_follows_settings():
    without = PageRenderer().render_post(post_props())
    with_repo = PageRenderer(Settings(UTTERANCES_REPO="me/comments")).render_post(
        post_props()
    )

    assert "utteranc.es" not in without
    assert 'repo="me/comments"' in with_repo


def test_fallback_placeholder():
    html = PageRenderer().render_fallback("not-built")

    assert "Carregando..." in html
    assert 'data-slug="not-built"' in html
    assert 'http-equiv="refresh"' in html
