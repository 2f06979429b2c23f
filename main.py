from __future__ import annotations

import logging
import uvicorn
from fastapi import FastAPI
from dotenv import load_dotenv
load_dotenv()
from recipehub.api.routes import router
from recipehub.core.config import SPOONACULAR_API_KEY, STORE_BACKEND, STORE_PATH

from recipehub.domain.repositories import KeyValueStore, RecipeProvider
from recipehub.infrastructure.kv_store import build_store
from recipehub.infrastructure.spoonacular_client import SpoonacularClient
from recipehub.infrastructure.user_store import UserStore
from recipehub.application.usecases import (
    FindRecipes,
    GetRecipeDetail,
    ListSavedRecipes,
    LookupBarcode,
    SearchIngredients,
)

log = logging.getLogger("app")


def create_app(provider: RecipeProvider | None = None, store: KeyValueStore | None = None) -> FastAPI:
    app = FastAPI(title="RecipeHub")

    @app.on_event("startup")
    def on_startup() -> None:
        recipe_provider = provider or SpoonacularClient(api_key=SPOONACULAR_API_KEY)
        user_store = UserStore(store or build_store(STORE_BACKEND, STORE_PATH))

        recipe_detail_uc = GetRecipeDetail(recipe_provider)

        # DI for routes.py
        app.state.recipe_provider = recipe_provider
        app.state.user_store = user_store
        app.state.find_recipes_uc = FindRecipes(recipe_provider, user_store)
        app.state.recipe_detail_uc = recipe_detail_uc
        app.state.search_ingredients_uc = SearchIngredients(recipe_provider)
        app.state.lookup_barcode_uc = LookupBarcode(recipe_provider)
        app.state.saved_recipes_uc = ListSavedRecipes(user_store, recipe_detail_uc)
        log.info("Startup complete")

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        recipe_provider = getattr(app.state, "recipe_provider", None)
        if isinstance(recipe_provider, SpoonacularClient):
            recipe_provider.session.close()

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8081, reload=False)
