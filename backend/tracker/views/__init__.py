from tracker.views.game_handlers import (
    create_game as create_game,
)
from tracker.views.game_handlers import (
    delete_game as delete_game,
)
from tracker.views.game_handlers import (
    game_stats as game_stats,
)
from tracker.views.game_handlers import (
    get_game as get_game,
)
from tracker.views.game_handlers import (
    list_games as list_games,
)
from tracker.views.game_handlers import (
    update_game as update_game,
)
from tracker.views.game_handlers import (
    upload_picture as upload_picture,
)
from tracker.views.profile_handlers import catalog as catalog
from tracker.views.profile_handlers import create_profile as create_profile
from tracker.views.profile_handlers import delete_profile as delete_profile
from tracker.views.profile_handlers import get_profile as get_profile
from tracker.views.profile_handlers import list_profiles as list_profiles
from tracker.views.profile_handlers import touch_profile as touch_profile
