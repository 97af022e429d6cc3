from catalog.views.docs_handlers import (
    docs_redirect as docs_redirect,
)
from catalog.views.docs_handlers import (
    openapi_document as openapi_document,
)
from catalog.views.docs_handlers import (
    swagger_ui as swagger_ui,
)
from catalog.views.game_handlers import (
    create_game as create_game,
)
from catalog.views.game_handlers import (
    delete_game as delete_game,
)
from catalog.views.game_handlers import (
    get_game as get_game,
)
from catalog.views.game_handlers import (
    list_games as list_games,
)
from catalog.views.game_handlers import (
    update_game as update_game,
)
