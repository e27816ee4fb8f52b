#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Key image bookkeeping across signatures. Kept out of the signing engine,
# callers inject the store where they accept signatures.

import logging
import threading

from clsag_glue.common import KeyImageReused

logger = logging.getLogger(__name__)


class KeyImageStore(object):
    """
    Records published key images, detects reuse of a private key
    """

    def seen(self, key_image):
        raise NotImplementedError()

    def add(self, key_image):
        raise NotImplementedError()

    def check_and_add(self, signature):
        """
        Rejects the signature if any of its key images was seen before,
        records all of them otherwise.

        :param signature:
        :return:
        """
        raise NotImplementedError()


class MemoryKeyImageStore(KeyImageStore):
    """
    Process local store, inserts are serialized by a lock
    """

    def __init__(self):
        self._images = set()
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._images)

    def seen(self, key_image):
        with self._lock:
            return bytes(key_image) in self._images

    def add(self, key_image):
        with self._lock:
            self._images.add(bytes(key_image))

    def check_and_add(self, signature):
        images = [bytes(x) for x in signature.key_images]
        with self._lock:
            for ki in images:
                if ki in self._images:
                    logger.warning("Key image reuse detected: %s", ki.hex())
                    raise KeyImageReused(ki)
            self._images.update(images)
        return True
