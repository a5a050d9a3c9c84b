from coiotlink.observer_app.config import CoIoTSettings, get_settings
from coiotlink.observer_app.observer import Announcement, MulticastObserver, ObserverState

__all__ = ["Announcement", "CoIoTSettings", "MulticastObserver", "ObserverState", "get_settings"]
