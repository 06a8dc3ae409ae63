"""
Main Entry Point

Command line front-end for the post collection. Builds the application
state (client, navigator, alerter, notification store) once and hands it to
the screen controllers, then runs one command:

    post-sync list
    post-sync show ID [--save-image PATH]
    post-sync create --title T --content C [--image PATH]
    post-sync update ID [--title T] [--content C] [--image PATH | --remove-image]
    post-sync delete ID
    post-sync notifications [--read ID] [--read-all] [--delete ID]
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import Config, load_config
from .api import PostClient, PostClientError
from .files import reference_from_path
from .notifications import NotificationStore
from .workflow import (
    Alerter,
    CreatePostForm,
    EditPostForm,
    Navigator,
    PostDetailController,
    PostListController,
)


def setup_logging(cfg: Config, log_level: Optional[str] = None) -> logging.Logger:
    """Set up logging for the application."""
    level = getattr(logging, (log_level or cfg.log.log_level).upper())

    logger = logging.getLogger("post_sync")
    logger.setLevel(level)

    # Handlers are installed once per process
    if logger.handlers:
        return logger

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler
    if cfg.log.log_to_file:
        cfg.log.log_directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            cfg.log.log_file_path,
            mode='a',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(cfg.log.log_format))
        logger.addHandler(file_handler)

    return logger


@dataclass
class AppState:
    """Application-level state shared by every screen."""
    client: Optional[PostClient]
    navigator: Navigator = field(default_factory=Navigator)
    alerter: Alerter = field(default_factory=Alerter)
    notifications: NotificationStore = field(default_factory=NotificationStore.with_samples)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="post-sync", description="Manage remote posts")
    parser.add_argument("--base-url", help="Post collection endpoint (default: $POST_API_URL)")
    parser.add_argument("--log-level", default=None, help="Logging level")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all posts")

    show = commands.add_parser("show", help="Show one post")
    show.add_argument("id", type=int)
    show.add_argument("--save-image", type=Path, help="Write the post image to this file")

    create = commands.add_parser("create", help="Create a post")
    create.add_argument("--title", required=True)
    create.add_argument("--content", required=True)
    create.add_argument("--image", type=Path)

    update = commands.add_parser("update", help="Update a post")
    update.add_argument("id", type=int)
    update.add_argument("--title")
    update.add_argument("--content")
    image_group = update.add_mutually_exclusive_group()
    image_group.add_argument("--image", type=Path)
    image_group.add_argument("--remove-image", action="store_true")

    delete = commands.add_parser("delete", help="Delete a post")
    delete.add_argument("id", type=int)

    notes = commands.add_parser("notifications", help="Show notifications")
    notes.add_argument("--read", metavar="ID")
    notes.add_argument("--read-all", action="store_true")
    notes.add_argument("--delete", metavar="ID")

    return parser


async def run_command(args: argparse.Namespace, app: AppState) -> bool:
    """Run one parsed command. Returns True on success."""
    if args.command == "list":
        screen = PostListController(app.client, app.navigator, app.alerter)
        if not await screen.load():
            return False
        if not screen.posts:
            print("No posts yet")
        for post in screen.posts:
            image = " [image]" if post.image_url else ""
            print(f"{post.id:>5}  {post.title}{image}")
        return True

    if args.command == "show":
        screen = PostDetailController(app.client, app.navigator, app.alerter)
        post = await screen.load(args.id)
        if post is None:
            return False
        print(post.title)
        print()
        print(post.content)
        if args.save_image:
            data = screen.image_bytes()
            if not data:
                print("\nPost has no image", file=sys.stderr)
                return False
            args.save_image.write_bytes(data)
            print(f"\nImage saved to {args.save_image} ({len(data)} bytes)")
        return True

    if args.command == "create":
        form = CreatePostForm(app.client, app.navigator, app.alerter)
        form.title = args.title
        form.content = args.content
        if args.image:
            form.pick_image(reference_from_path(args.image))
        post = await form.submit()
        _print_errors(form.errors)
        if post is not None:
            print(f"Created post {post.id}")
        return post is not None

    if args.command == "update":
        form = EditPostForm(app.client, app.navigator, app.alerter)
        if not await form.load(args.id):
            return False
        if args.title is not None:
            form.title = args.title
        if args.content is not None:
            form.content = args.content
        if args.image:
            form.pick_image(reference_from_path(args.image))
        elif args.remove_image:
            form.remove_image()
        post = await form.submit()
        _print_errors(form.errors)
        if post is not None:
            print(f"Updated post {post.id}")
        return post is not None

    if args.command == "delete":
        screen = PostListController(app.client, app.navigator, app.alerter)
        return await screen.delete(args.id)

    if args.command == "notifications":
        store = app.notifications
        if args.read:
            store.mark_as_read(args.read)
        if args.read_all:
            store.mark_all_as_read()
        if args.delete:
            store.delete(args.delete)
        print(f"{store.unread_count()} unread")
        for note in store.all():
            marker = " " if note.read else "*"
            print(f"{marker} [{note.id}] {note.title} - {note.description} ({note.time})")
        return True

    raise ValueError(f"Unknown command: {args.command}")


def _print_errors(errors: dict) -> None:
    for name, message in errors.items():
        print(f"{name}: {message}", file=sys.stderr)


async def _run(args: argparse.Namespace, cfg: Config) -> bool:
    if args.command == "notifications":
        # Local state only, no endpoint needed
        return await run_command(args, AppState(client=None))

    async with PostClient(
        base_url=cfg.api.base_url,
        timeout=cfg.api.timeout_seconds,
        json_field=cfg.api.json_field,
    ) as client:
        return await run_command(args, AppState(client=client))


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the command line front-end."""
    args = build_parser().parse_args(argv)
    cfg = load_config(base_url=args.base_url)
    logger = setup_logging(cfg, args.log_level)

    try:
        ok = asyncio.run(_run(args, cfg))
        sys.exit(0 if ok else 1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    except (PostClientError, ValueError, KeyError, OSError) as e:
        logger.error(f"{e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
