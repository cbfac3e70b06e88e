"""Decorated bundle interfaces shared by the collector and end-to-end tests."""

import abc
import logging

from log_bundler.annotations import get_logger, log_bundle, log_message, message
from log_bundler.codegen import LogLevel


class QueueError(Exception):
    pass


@log_bundle(project_code="AMQ")
class ServerMessages(abc.ABC):

    @message(id=119000, value="Queue {} does not exist")
    def queue_not_found(self, name: str) -> str: ...

    @message(id=119001, value="Address {} is full")
    def address_full(self, address: str) -> QueueError: ...

    @log_message(id=222000, value="Paging is disabled", level=LogLevel.WARN)
    def paging_disabled(self) -> None: ...

    @log_message(id=224000, value="Failed to deliver to {}", level="error")
    def delivery_failed(self, queue: str, cause: Exception) -> None: ...

    @get_logger
    def logger(self) -> logging.Logger: ...

    def describe(self):
        return "not part of the bundle"


class PlainMessages:

    @message(id=1, value="Not collected")
    def hello(self) -> str: ...
