from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from twelvefactor._internal.core.models.apps import App, Process


class StackBuilder(ABC):
    """
    Provisions the stack of backend resources for an app.
    """

    @abstractmethod
    def build(self, app: App, processes: Optional[List[Process]] = None) -> None:
        """
        Creates or updates the backend resources for `processes`, `app.processes` by default.
        Processes are converged in order. The first failure is raised as is;
        processes converged before it are not rolled back.
        """
        pass

    @abstractmethod
    def remove(self, app_id: str) -> None:
        """
        Removes the backend resources of the app. Stops on the first failure.
        """
        pass

    @abstractmethod
    def services(self, app_id: str) -> Dict[str, str]:
        """
        Returns a mapping of process name to backend resource name for the app.
        """
        pass
