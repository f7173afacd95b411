"""
Entry point for executing user input.

Parses a line, runs the command against the model, and saves both
stores after any command that changed them.
"""

import logging
from typing import Optional

from ..exceptions import StorageIOError, TutorAidError
from ..models.result import CommandResult
from ..storage.storage_manager import StorageManager
from ..store.model_manager import ModelManager
from .parser import TutorAidParser


logger = logging.getLogger(__name__)


class LogicManager:
    """
    Runs commands and keeps the data files in step with the model.

    Args:
        model: Model the commands act on
        storage: Storage to save to after mutating commands, or None to
            keep everything in memory

    Examples:
        >>> logic = LogicManager(ModelManager(), storage)
        >>> result = logic.execute("add -l n/Math c/10 p/80")
        >>> result.feedback
        'New lesson added: Math'
    """

    def __init__(self, model: ModelManager, storage: Optional[StorageManager] = None):
        self._model = model
        self._storage = storage
        self._parser = TutorAidParser()

    @property
    def model(self) -> ModelManager:
        return self._model

    def execute(self, user_input: str) -> CommandResult:
        """
        Execute one line of user input.

        Returns:
            CommandResult; failures carry the error that stopped the command
        """
        try:
            command = self._parser.parse(user_input)
            result = command.execute(self._model)
        except TutorAidError as e:
            logger.info(f"Command failed: {e.message}")
            return CommandResult.failure(e)

        logger.info(f"Executed {type(command).__name__}")

        if command.MUTATES and self._storage is not None:
            try:
                self._storage.save(self._model)
            except StorageIOError as e:
                logger.error(f"Could not save data: {e.message}")
                return CommandResult.failure(
                    StorageIOError(
                        f"{result.feedback}\nCould not save data: {e.message}",
                        e.details,
                    )
                )

        return result
