from webseries.models.viewer import Viewer, Role
from webseries.models.country import Country
from webseries.models.series import Series, SeriesGenre, SeriesDubbing, SeriesSubtitle, Episode
from webseries.models.feedback import Feedback
from webseries.models.watch_history import WatchHistory

__all__ = [
    "Viewer",
    "Role",
    "Country",
    "Series",
    "SeriesGenre",
    "SeriesDubbing",
    "SeriesSubtitle",
    "Episode",
    "Feedback",
    "WatchHistory",
]
