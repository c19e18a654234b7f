"""Listing of source directories used by filtered directory nodes.

This package builds sorted tree representations of existing directories on the
invoking filesystem, so that filtered directories expand to the same entries in
the same order on every render.
"""
