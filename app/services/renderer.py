"""
Pure HTML renderers for each view.

Every function takes plain data and returns an HTML fragment for the
content region. Navigation is expressed as small forms that post an
event back to /events/{event}.
"""

from html import escape
from typing import Dict, Iterable, List, Optional

from app.schemas.blog import Page, Post, PostFields

LOADING_HTML = '<div class="loading" style="text-align: center; margin-top: 50px;">Loading...</div>'
POSTS_ERROR_HTML = "<p>Error loading posts. Is the server running?</p>"
PAGE_ERROR_HTML = "<p>Error loading page.</p>"
POST_ERROR_HTML = "<p>Error loading post.</p>"
POST_NOT_FOUND_HTML = "<p>Post not found.</p>"
PAGE_NOT_FOUND_HTML = "<p>Page not found.</p>"
NO_POSTS_HTML = "<p>No posts found.</p>"

FORM_FIELDS = (
    ("title", "Title", "input"),
    ("summary", "Summary", "input"),
    ("content", "Content", "textarea"),
    ("author", "Author", "input"),
)


def event_link(
    event: str,
    label: str,
    fields: Optional[Dict[str, object]] = None,
    css_class: str = "",
) -> str:
    hidden = "".join(
        f'<input type="hidden" name="{escape(name)}" value="{escape(str(value))}">'
        for name, value in (fields or {}).items()
    )
    class_attr = f' class="{escape(css_class)}"' if css_class else ""
    return (
        f'<form class="event" method="post" action="/events/{escape(event)}">'
        f"{hidden}<button type=\"submit\"{class_attr}>{label}</button></form>"
    )


def render_loading() -> str:
    return LOADING_HTML


def render_home(posts: List[Post]) -> str:
    """Post list in the order the backend returned it."""
    if not posts:
        items = NO_POSTS_HTML
    else:
        items = "".join(_post_item(post) for post in posts)
    return f'<section class="post-list">{items}</section>'


def _post_item(post: Post) -> str:
    return (
        '<article class="post-item">'
        f"<h2>{event_link('show-post', escape(post.title), {'post_id': post.id}, 'title-link')}</h2>"
        f'<div class="post-meta"><span>{escape(post.date)}</span></div>'
        f"<p>{escape(post.summary)}</p>"
        f"{event_link('show-post', 'Read more &rarr;', {'post_id': post.id}, 'read-more')}"
        "</article>"
    )


def render_post_detail(post: Optional[Post]) -> str:
    if post is None:
        return POST_NOT_FOUND_HTML
    return (
        '<article class="post-detail">'
        f"{event_link('show-home', '&larr; Back to Home', css_class='back-link')}"
        f"<header><h1>{escape(post.title)}</h1>"
        f'<div class="post-meta">By {escape(post.author)} on {escape(post.date)}</div>'
        "</header>"
        f'<div class="post-content"><p>{escape(post.content)}</p></div>'
        "</article>"
    )


def render_page(page: Optional[Page]) -> str:
    if page is None:
        return PAGE_NOT_FOUND_HTML
    return (
        '<article class="page-detail">'
        f"<header><h1>{escape(page.title)}</h1></header>"
        f'<div class="page-content"><p>{escape(page.content)}</p></div>'
        "</article>"
    )


def render_post_form(
    *,
    event: str,
    heading: str,
    submit_label: str,
    back_event: str,
    values: Optional[Dict[str, str]] = None,
    post_id=None,
    date: Optional[str] = None,
) -> str:
    """Shared add/edit form. `date` is shown read-only on the edit form."""
    values = values or {}
    hidden = (
        f'<input type="hidden" name="post_id" value="{escape(str(post_id))}">'
        if post_id is not None
        else ""
    )
    rows = "".join(
        _form_row(name, label, kind, values.get(name, ""))
        for name, label, kind in FORM_FIELDS
    )
    date_row = (
        f'<div class="post-meta">Published on {escape(date)}</div>' if date else ""
    )
    return (
        f'<section class="{escape(event)}-form">'
        f"{event_link(back_event, '&larr; Back', css_class='back-link')}"
        f"<h2>{escape(heading)}</h2>"
        f'<form method="post" action="/events/{escape(event)}">'
        f"{hidden}{date_row}{rows}"
        f'<button type="submit" id="submit-btn">{escape(submit_label)}</button>'
        "</form></section>"
    )


def _form_row(name: str, label: str, kind: str, value: str) -> str:
    if kind == "textarea":
        control = f'<textarea id="{name}" name="{name}" rows="10" required>{escape(value)}</textarea>'
    else:
        control = f'<input type="text" id="{name}" name="{name}" value="{escape(value)}" required>'
    return f'<div><label for="{name}">{label}</label>{control}</div>'


def render_add_post(back_event: str, values: Optional[Dict[str, str]] = None) -> str:
    return render_post_form(
        event="submit-add-post",
        heading="Add New Post",
        submit_label="Publish Post",
        back_event=back_event,
        values=values,
    )


def render_edit_post(
    post: Optional[Post], back_event: str, values: Optional[Dict[str, str]] = None
) -> str:
    if post is None:
        return POST_NOT_FOUND_HTML
    if values is None:
        values = post.model_dump(include=set(PostFields.model_fields))
    return render_post_form(
        event="submit-edit-post",
        heading="Edit Post",
        submit_label="Update Post",
        back_event=back_event,
        values=values,
        post_id=post.id,
        date=post.date,
    )


def render_login(username: str = "") -> str:
    return (
        '<section class="login-form">'
        "<h2>Admin Login</h2>"
        '<form method="post" action="/events/submit-login">'
        '<div><label for="username">Username</label>'
        f'<input type="text" id="username" name="username" value="{escape(username)}" required></div>'
        '<div><label for="password">Password</label>'
        '<input type="password" id="password" name="password" required></div>'
        '<button type="submit">Log In</button>'
        "</form></section>"
    )


def render_admin(posts: List[Post]) -> str:
    if not posts:
        rows = f'<tr><td colspan="4">{NO_POSTS_HTML}</td></tr>'
    else:
        rows = "".join(_admin_row(post) for post in posts)
    return (
        '<section class="admin-panel">'
        "<h2>Manage Posts</h2>"
        f'<div class="admin-actions">{event_link("show-add-post", "Add New Post")}'
        f'{event_link("logout", "Log Out")}</div>'
        '<table class="admin-list"><thead><tr>'
        "<th>Title</th><th>Author</th><th>Date</th><th>Actions</th>"
        f"</tr></thead><tbody>{rows}</tbody></table></section>"
    )


def _admin_row(post: Post) -> str:
    return (
        "<tr>"
        f"<td>{escape(post.title)}</td>"
        f"<td>{escape(post.author)}</td>"
        f"<td>{escape(post.date)}</td>"
        f"<td>{event_link('show-edit-post', 'Edit', {'post_id': post.id})}"
        f"{_delete_button(post)}</td>"
        "</tr>"
    )


def _delete_button(post: Post) -> str:
    # The browser answers the confirm dialog; no answer means "no".
    return (
        '<form class="event" method="post" action="/events/delete-post" '
        "onsubmit=\"this.confirmed.value = confirm('Are you sure you want to delete this post?') ? 'yes' : 'no';\">"
        f'<input type="hidden" name="post_id" value="{escape(str(post.id))}">'
        '<input type="hidden" name="confirmed" value="no">'
        '<button type="submit" class="danger">Delete</button></form>'
    )


def render_nav(page_slugs: Iterable[str], is_authenticated: bool) -> str:
    links = [event_link("show-home", "Home")]
    links.extend(
        event_link("show-page", escape(slug.replace("-", " ").title()), {"slug": slug})
        for slug in page_slugs
    )
    links.append(
        event_link("show-admin", "Admin")
        if is_authenticated
        else event_link("show-login", "Login")
    )
    return f'<nav>{"".join(links)}</nav>'


def render_shell(
    *,
    site_title: str,
    nav: str,
    content: str,
    alerts: Iterable[str] = (),
    scroll_top: int = 0,
) -> str:
    alert_html = "".join(
        f'<div class="alert" role="alert">{escape(message)}</div>' for message in alerts
    )
    return (
        "<!doctype html>"
        '<html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"<title>{escape(site_title)}</title></head>"
        f"<body><header><h1>{escape(site_title)}</h1>{nav}</header>"
        f"{alert_html}"
        f'<main id="app" data-scroll-top="{scroll_top}">{content}</main>'
        "</body></html>"
    )
