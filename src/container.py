"""
Dependency injection container for managing application dependencies.
"""

import logging
from typing import Optional

from src.adapters.codebase.local_codebase_adapter import LocalCodebaseAdapter
from src.adapters.files.local_backup_store import LocalBackupStore
from src.adapters.llm.openai_tools_adapter import OpenAIToolsAdapter
from src.config.settings import Settings, settings as default_settings
from src.ports.codebase.codebase_port import CodebasePort
from src.ports.files.backup_store_port import BackupStorePort
from src.ports.llm.llm_port import LLMPort
from src.ports.llm.tools_port import ToolsHandlerPort
from src.use_cases.files.create_items import CreateItemsUseCase
from src.use_cases.files.patch_file import PatchFileUseCase
from src.use_cases.files.rollback_patch import RollbackPatchUseCase
from src.use_cases.tools.coder_tools import CoderToolsHandler
from src.utils.workspace import PathValidator


class DependencyContainer:
    """
    Container for managing application dependencies using dependency injection.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or default_settings
        self._instances = {}
        self._logger = logging.getLogger(__name__)

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_path_validator(self) -> PathValidator:
        """
        Get the workspace path validator.

        Returns:
            PathValidator bound to the configured workspace root (or the CWD)
        """
        if "path_validator" not in self._instances:
            self._instances["path_validator"] = PathValidator(
                self._settings.workspace_root
            )
        return self._instances["path_validator"]

    def get_backup_store(self) -> BackupStorePort:
        """
        Get backup store adapter instance.

        Returns:
            BackupStorePort implementation writing under settings.backup_dir
        """
        if "backup_store" not in self._instances:
            self._instances["backup_store"] = LocalBackupStore(
                self._settings.backup_dir, self._logger
            )
        return self._instances["backup_store"]

    def get_codebase(self) -> CodebasePort:
        """
        Get codebase adapter instance.

        Returns:
            CodebasePort implementation
        """
        if "codebase" not in self._instances:
            self._instances["codebase"] = LocalCodebaseAdapter(
                self.get_path_validator(), self._logger
            )
        return self._instances["codebase"]

    def get_patch_file_use_case(self) -> PatchFileUseCase:
        """
        Get patch file use case with injected dependencies.

        Returns:
            Configured PatchFileUseCase
        """
        if "patch_file_use_case" not in self._instances:
            self._instances["patch_file_use_case"] = PatchFileUseCase(
                self.get_backup_store(), self.get_path_validator(), self._logger
            )
        return self._instances["patch_file_use_case"]

    def get_rollback_patch_use_case(self) -> RollbackPatchUseCase:
        """
        Get rollback use case with injected dependencies.

        Returns:
            Configured RollbackPatchUseCase
        """
        if "rollback_patch_use_case" not in self._instances:
            self._instances["rollback_patch_use_case"] = RollbackPatchUseCase(
                self.get_backup_store(), self.get_path_validator(), self._logger
            )
        return self._instances["rollback_patch_use_case"]

    def get_create_items_use_case(self) -> CreateItemsUseCase:
        """
        Get create items use case with injected dependencies.

        Returns:
            Configured CreateItemsUseCase
        """
        if "create_items_use_case" not in self._instances:
            self._instances["create_items_use_case"] = CreateItemsUseCase(
                self.get_path_validator(), self._logger
            )
        return self._instances["create_items_use_case"]

    def get_tools_handler(self) -> ToolsHandlerPort:
        """
        Coding tools (patch, rollback, create, search) backed by the file use cases.
        """
        if "tools_handler" not in self._instances:
            self._instances["tools_handler"] = CoderToolsHandler(
                patch_uc=self.get_patch_file_use_case(),
                rollback_uc=self.get_rollback_patch_use_case(),
                create_uc=self.get_create_items_use_case(),
                codebase=self.get_codebase(),
                logger=self._logger,
                debug=self._settings.debug,
            )
        return self._instances["tools_handler"]

    def get_llm_tools_adapter(self) -> LLMPort:
        """
        LLM adapter with tool support (function-calling).

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if "llm_tools_adapter" not in self._instances:
            self._instances["llm_tools_adapter"] = OpenAIToolsAdapter(
                tools_handler=self.get_tools_handler(),
                logger=self._logger,
                settings=self._settings,
            )
        return self._instances["llm_tools_adapter"]

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()


# Global container instance
container = DependencyContainer()
