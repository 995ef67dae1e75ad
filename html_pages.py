import html
import logging
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from errors import ErrorKind, NetworkError
from network import Relationships, SocialNetwork
from user_record import UserRecord

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"
NONE_PLACEHOLDER = "<p>None</p>"


def esc(text) -> str:
    return html.escape(str(text), quote=True)


def profile_filename(user_id: int) -> str:
    return f"user{user_id}.html"


def user_link(user_id: int, name: str) -> str:
    return f'<li><a href="{profile_filename(user_id)}">{esc(name)}</a></li>'


def render_index(entries: Sequence[Tuple[int, str]]) -> str:
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        "<title>My Social Network</title>",
        "</head>",
        "<body>",
        "<h1>My Social Network: User List</h1>",
        "<ol>",
    ]
    lines.extend(user_link(user_id, name) for user_id, name in entries)
    lines.extend(["</ol>", "</body>", "</html>"])
    return "\n".join(lines) + "\n"


def render_user_list(title: str, user_ids: Sequence[int], names: Sequence[str]) -> List[str]:
    lines = [f"<h2>{esc(title)}</h2>"]
    if not user_ids:
        lines.append(NONE_PLACEHOLDER)
        return lines
    lines.append("<ul>")
    lines.extend(user_link(user_id, names[user_id - 1]) for user_id in user_ids)
    lines.append("</ul>")
    return lines


def render_profile(user: UserRecord, relationships: Relationships, names: Sequence[str]) -> str:
    """Profile page for one user.

    names[k] must be the display name of user k + 1; it resolves the ids in
    the three relationship lists.
    """
    heading = esc(user.name)
    if user.location:
        heading += f" in {esc(user.location)}"

    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        f"<title>{esc(user.name)} Profile</title>",
        "</head>",
        "<body>",
        f'<h2><a href="{INDEX_FILENAME}">Social Network</a></h2>',
        f"<h1>{heading}</h1>",
        f'<img alt="Profile pic" src="{esc(user.pic_url)}" />',
    ]
    lines += render_user_list("Follows", relationships.follows, names)
    lines += render_user_list("Followers", relationships.followers, names)
    lines += render_user_list("Mutuals", relationships.mutuals, names)
    lines.extend(["</body>", "</html>"])
    return "\n".join(lines) + "\n"


def render_site(network: SocialNetwork) -> Dict[str, str]:
    if len(network) < 1:
        raise NetworkError(ErrorKind.EMPTY_NETWORK, "cannot create social network pages for zero users")
    pages = {INDEX_FILENAME: render_index(network.index_entries())}
    for user_id in network.ids:
        pages[profile_filename(user_id)] = render_profile(
            network.get_user(user_id),
            network.relationships_for(user_id),
            network.names,
        )
    return pages


def remove_pages(paths: List[Path], output_dir: Path, created_dir: bool):
    for path in paths:
        path.unlink(missing_ok=True)
    if created_dir and not any(output_dir.iterdir()):
        output_dir.rmdir()


def write_site(network: SocialNetwork, output_dir=".") -> List[Path]:
    """Write the index page and one profile page per user.

    Every page is rendered before the first file is opened. If any write
    fails, the pages already written are removed again and a NetworkError
    is raised.
    """
    pages = render_site(network)
    output_dir = Path(output_dir)
    created_dir = not output_dir.exists()

    written = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for filename, content in pages.items():
            path = output_dir / filename
            with open(path, 'w', encoding='utf-8') as f:
                written.append(path)
                f.write(content)
    except OSError as e:
        logger.debug(f"Removing {len(written)} partially written pages from {output_dir}")
        remove_pages(written, output_dir, created_dir and output_dir.is_dir())
        raise NetworkError(ErrorKind.OUTPUT_WRITE, f"could not write pages to {output_dir}: {e}") from e

    logger.info(f"Wrote {len(written)} pages to {output_dir}")
    return written
