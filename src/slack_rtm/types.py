"""Wire records shared by the Web API bindings and the RTM event taxonomy.

All records are frozen pydantic models. Unknown keys are ignored so that
schema additions on Slack's side do not break decoding, and every optional
field treats an explicit JSON null the same as a missing key.

Timestamps (`ts`, `latest`, `last_read`, ...) are kept as the strings Slack
sends them as and are never converted to floats.
"""

from pydantic import BaseModel, ConfigDict


class SlackModel(BaseModel):
    """Base for every decoded Slack record."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Reaction(SlackModel):
    """An emoji reaction attached to a message, file or file comment."""

    name: str
    count: int
    users: list[str]


class Comment(SlackModel):
    """A comment on a file."""

    id: str
    timestamp: int
    user: str
    comment: str
    reactions: list[Reaction] | None = None


class File(SlackModel):
    """File metadata as returned by files.info and embedded in events.

    Thumbnail fields are only present for images and are optional here.
    """

    id: str
    created: int | None = None
    timestamp: int | None = None
    name: str | None = None
    title: str
    mimetype: str
    filetype: str
    pretty_type: str
    user: str
    mode: str
    editable: bool
    is_external: bool
    external_type: str
    size: int
    url: str
    url_download: str | None = None
    url_private: str
    url_private_download: str
    thumb_64: str | None = None
    thumb_80: str | None = None
    thumb_360: str | None = None
    thumb_360_gif: str | None = None
    thumb_360_w: int | None = None
    thumb_360_h: int | None = None
    permalink: str
    edit_link: str | None = None
    preview: str | None = None
    preview_highlight: str | None = None
    lines: int | None = None
    lines_more: int | None = None
    is_public: bool
    public_url_shared: bool
    channels: list[str]
    groups: list[str]
    ims: list[str] | None = None
    initial_comment: Comment | None = None
    num_stars: int | None = None
    is_starred: bool | None = None
    pinned_to: list[str] | None = None
    reactions: list[Reaction] | None = None


class Paging(SlackModel):
    """Pagination block of list and search responses."""

    count: int
    total: int
    page: int
    pages: int


class Topic(SlackModel):
    value: str
    creator: str
    last_set: int


class Purpose(SlackModel):
    value: str
    creator: str
    last_set: int


class Channel(SlackModel):
    """A public channel."""

    id: str
    name: str
    is_channel: bool
    created: int
    creator: str
    is_archived: bool
    is_general: bool
    members: list[str] | None = None
    topic: Topic | None = None
    purpose: Purpose | None = None
    is_member: bool
    last_read: str | None = None
    unread_count: int | None = None
    unread_count_display: int | None = None


class Group(SlackModel):
    """A private channel."""

    id: str
    name: str
    is_group: bool
    created: int
    creator: str
    is_archived: bool
    members: list[str] | None = None
    topic: Topic | None = None
    purpose: Purpose | None = None
    last_read: str | None = None
    unread_count: int | None = None
    unread_count_display: int | None = None


class Im(SlackModel):
    """A direct-message conversation with one user."""

    id: str
    is_im: bool
    user: str
    created: int
    is_user_deleted: bool | None = None


class UserProfile(SlackModel):
    first_name: str | None = None
    last_name: str | None = None
    real_name: str | None = None
    email: str | None = None
    skype: str | None = None
    phone: str | None = None
    image_24: str | None = None
    image_32: str | None = None
    image_48: str | None = None
    image_72: str | None = None
    image_192: str | None = None


class User(SlackModel):
    """A member of the team, including bots."""

    id: str
    name: str
    deleted: bool
    color: str | None = None
    profile: UserProfile
    is_admin: bool | None = None
    is_owner: bool | None = None
    is_primary_owner: bool | None = None
    is_restricted: bool | None = None
    is_ultra_restricted: bool | None = None
    has_2fa: bool | None = None
    two_factor_type: str | None = None
    has_files: bool | None = None


class Team(SlackModel):
    """The team as described by rtm.start."""

    id: str
    name: str
    email_domain: str
    domain: str
    msg_edit_window_mins: int | None = None
    over_storage_limit: bool | None = None
    plan: str | None = None


class Bot(SlackModel):
    """Minimal bot record from rtm.start and bot_added/bot_changed events."""

    id: str
    deleted: bool | None = None
    name: str
    icons: dict[str, str] | None = None


class AttachmentField(SlackModel):
    title: str
    value: str
    short: bool


class Attachment(SlackModel):
    """A legacy message attachment."""

    fallback: str
    color: str | None = None
    pretext: str | None = None
    author_name: str | None = None
    author_link: str | None = None
    author_icon: str | None = None
    title: str | None = None
    title_link: str | None = None
    text: str | None = None
    fields: list[AttachmentField] | None = None
    image_url: str | None = None
    thumb_url: str | None = None
