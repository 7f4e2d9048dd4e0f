"""
Deployed Lambda entrypoints for link images.

The image store is created from the environment once per cold start and
shared by both handlers:

    linkpreview.handlers.link_image.entrypoint.upload_handler
    linkpreview.handlers.link_image.entrypoint.get_handler
"""

from linkpreview.core.factory import create_image_store

from .handler import build_get_handler, build_upload_handler

store = create_image_store()

upload_handler = build_upload_handler(store)
get_handler = build_get_handler(store)
