"""
Pantry Chef - CLI Entry Point.

Usage:
    pantry-chef login you@example.com    Sign in (password is prompted)
    pantry-chef chat                     Talk to the chef assistant
    pantry-chef inventory                List your ingredients
    pantry-chef --help                   Show help
"""

import asyncio
import logging
from datetime import date

import typer
from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

from pantry_chef.errors import PantryChefError
from pantry_chef.models import ChatMessage, IngredientCreate, MealPlanCreate
from pantry_chef.recipe_gen import GeneratedRecipe

app = typer.Typer(
    name="pantry-chef",
    help="Pantry Chef - Your kitchen inventory, recipes, meal plans and AI chef.",
    add_completion=False,
)
console = Console()

EXPIRY_STYLES = {
    "expired": "[red]expired[/red]",
    "expiring": "[yellow]expiring[/yellow]",
    "warning": "[dark_orange]this week[/dark_orange]",
    "fresh": "[green]fresh[/green]",
    "none": "",
}


@app.callback()
def main(
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all Gemini prompts to prompt_logs/"),
) -> None:
    from pantry_chef.config import settings
    from pantry_chef.llm.prompt_logger import enable_prompt_logging

    try:
        level = settings.log_level
        if log_prompts or settings.pantry_log_prompts:
            enable_prompt_logging(True)
    except Exception:
        # Settings incomplete; `health` reports the details
        level = "WARNING"

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_store(require_user: bool = True):
    """Build a store on the shared Supabase client with the saved session."""
    from pantry_chef.auth import restore_session
    from pantry_chef.db import get_client
    from pantry_chef.store import KitchenStore

    client = get_client()
    store = KitchenStore(client)
    store.set_user(restore_session(client))

    if require_user and store.user is None:
        console.print("[red]Not signed in. Run `pantry-chef login <email>` first.[/red]")
        raise typer.Exit(1)
    return store


def _assistant():
    from pantry_chef.llm import get_client
    from pantry_chef.services import ChefAssistant

    return ChefAssistant(get_client())


def _print_recipe(recipe: GeneratedRecipe, *, confident: bool = True) -> None:
    body = [f"[italic]{recipe.description}[/italic]", ""]
    body.append(
        f"⏱  {recipe.total_time} min (prep {recipe.prep_time} · cook {recipe.cook_time}) · "
        f"serves {recipe.servings} · {recipe.difficulty} · {recipe.cuisine}"
    )
    if recipe.tags:
        body.append(f"🏷  {', '.join(recipe.tags)}")
    body.append("\n[bold]Ingredients[/bold]")
    body.extend(f"  • {item}" for item in recipe.ingredients)
    body.append("\n[bold]Instructions[/bold]")
    body.extend(f"  {number}. {step}" for number, step in enumerate(recipe.instructions, 1))
    if recipe.tips:
        body.append("\n[bold]Tips[/bold]")
        body.extend(f"  💡 {tip}" for tip in recipe.tips)
    if recipe.story:
        body.append(f"\n[dim]{recipe.story}[/dim]")
    if not confident:
        body.append("\n[yellow]Best-effort parse: the reply was not in the requested format.[/yellow]")

    console.print(Panel("\n".join(body), title=recipe.title, border_style="green"))


def _print_message(message: ChatMessage) -> None:
    from pantry_chef.services.chat import recipe_from_message

    if message.display_type == "recipe":
        console.print(f"\n[bold green]Chef:[/bold green] {message.content}")
        recipe = recipe_from_message(message)
        if recipe:
            _print_recipe(recipe, confident=message.metadata.get("confident", True))
    elif message.message_type == "user":
        console.print(f"\n[bold blue]You:[/bold blue] {message.content}")
    else:
        style = "red" if message.metadata.get("error") else "green"
        console.print(f"\n[bold {style}]Chef:[/bold {style}] {message.content}")


def _report_prompt_logs() -> None:
    from pantry_chef.llm.prompt_logger import get_session_log_dir, is_enabled

    if is_enabled():
        log_dir = get_session_log_dir()
        if log_dir:
            console.print(f"\n[dim]Prompts logged to: {log_dir}[/dim]")


# =============================================================================
# Account
# =============================================================================


@app.command()
def login(
    email: str = typer.Argument(..., help="Account email"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in and remember the session."""
    from pantry_chef.auth import save_session, sign_in
    from pantry_chef.db import get_client

    client = get_client()
    try:
        user = sign_in(client, email, password)
    except PantryChefError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    save_session(client)
    console.print(f"✅ Signed in as {user.email}")


@app.command()
def logout() -> None:
    """Sign out and forget the saved session."""
    from pantry_chef.auth import sign_out
    from pantry_chef.db.client import get_client, reset_client

    sign_out(get_client())
    reset_client()
    console.print("Signed out.")


# =============================================================================
# Chef assistant
# =============================================================================


@app.command()
def chat() -> None:
    """
    Start an interactive chat with the chef assistant.

    Commands: /new (new conversation), /clear (delete history),
    /save (save the last generated recipe), /quit.
    """
    from pantry_chef.services import ChatService
    from pantry_chef.services.chat import recipe_from_message

    store = _load_store()
    service = ChatService(store, _assistant())

    async def run() -> None:
        await store.fetch_ingredients()
        await service.open()
        for message in store.chat_messages:
            _print_message(message)

        last_recipe: GeneratedRecipe | None = None
        while True:
            try:
                user_input = console.input("\n[bold blue]You:[/bold blue] ").strip()
            except (KeyboardInterrupt, EOFError):
                console.print("\n[dim]Goodbye! 👋[/dim]")
                break

            if not user_input:
                continue
            if user_input.lower() in ("/quit", "exit", "quit"):
                console.print("\n[dim]Goodbye! 👋[/dim]")
                break

            try:
                if user_input == "/new":
                    service.new_chat()
                    console.print("[dim]Started a new conversation.[/dim]")
                elif user_input == "/clear":
                    await service.clear()
                    console.print("[dim]Chat history cleared.[/dim]")
                elif user_input == "/save":
                    if last_recipe is None:
                        console.print("[yellow]No recipe to save yet.[/yellow]")
                    else:
                        saved = await service.save_recipe(last_recipe)
                        console.print(f"✅ Saved '{saved.title}' to your recipes")
                else:
                    with Live(Spinner("dots", text="Cooking up a reply..."), console=console, transient=True):
                        reply = await service.send_message(user_input)
                    if reply:
                        _print_message(reply)
                        last_recipe = recipe_from_message(reply) or last_recipe
            except PantryChefError as e:
                console.print(f"\n[red]Error: {e}[/red]")

    asyncio.run(run())
    _report_prompt_logs()


@app.command()
def ask(question: str = typer.Argument(..., help="Cooking question")) -> None:
    """Ask a one-off cooking question (not saved to history)."""
    assistant = _assistant()
    try:
        with Live(Spinner("dots", text="Thinking..."), console=console, transient=True):
            answer = asyncio.run(assistant.answer_cooking_question(question))
    except PantryChefError as e:
        console.print(f"[red]{getattr(e, 'user_message', e)}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold green]Chef:[/bold green] {answer}")
    _report_prompt_logs()


@app.command()
def generate(
    ingredients: list[str] = typer.Argument(None, help="Ingredients to use (default: your pantry)"),
    cuisine: str | None = typer.Option(None, help="Cuisine style"),
    difficulty: str = typer.Option("medium", help="easy, medium or hard"),
    time: int | None = typer.Option(None, "--time", help="Maximum cooking time in minutes"),
    mood: str | None = typer.Option(None, help="Anything else you fancy"),
    save: bool = typer.Option(False, "--save", help="Save the recipe to your collection"),
) -> None:
    """Generate a recipe without going through chat."""
    from pantry_chef.llm.prompts import RecipeRequest, extract_preferences

    store = _load_store(require_user=save or not ingredients)

    async def run() -> None:
        names = list(ingredients or [])
        if not names:
            await store.fetch_ingredients()
            names = [item.name for item in store.ingredients[:8]]
        if not names:
            console.print("[yellow]No ingredients given and your pantry is empty.[/yellow]")
            return

        request = RecipeRequest(
            ingredients=names,
            preferences=extract_preferences(mood or ""),
            cooking_time=time,
            difficulty=difficulty,
            cuisine=cuisine,
            mood=mood,
        )
        with Live(Spinner("dots", text="Creating a recipe..."), console=console, transient=True):
            result = await _assistant().generate_recipe(request)
        _print_recipe(result.recipe, confident=result.is_confident)

        if save:
            saved = await store.add_recipe(result.recipe.to_recipe_create())
            console.print(f"✅ Saved '{saved.title}'")

    try:
        asyncio.run(run())
    except PantryChefError as e:
        console.print(f"[red]{getattr(e, 'user_message', e)}[/red]")
        raise typer.Exit(1)
    _report_prompt_logs()


# =============================================================================
# Kitchen data
# =============================================================================


@app.command()
def inventory(
    search: str = typer.Option("", help="Filter by name"),
    category: str = typer.Option("All", help="Filter by category"),
    sort: str = typer.Option("name", help="name, expiry or quantity"),
) -> None:
    """List your ingredients."""
    from pantry_chef.domain import expiry_status, filter_ingredients, sort_ingredients

    store = _load_store()
    asyncio.run(store.fetch_ingredients())
    items = sort_ingredients(filter_ingredients(store.ingredients, search, category), sort)  # type: ignore[arg-type]

    table = Table(title=f"Inventory ({len(items)})")
    for column in ("Name", "Quantity", "Category", "Expires", "Status"):
        table.add_column(column)
    for item in items:
        table.add_row(
            item.name,
            f"{item.quantity:g} {item.unit}",
            item.category,
            item.expiry_date.isoformat() if item.expiry_date else "",
            EXPIRY_STYLES[expiry_status(item.expiry_date)],
        )
    console.print(table)


@app.command("add-ingredient")
def add_ingredient(
    name: str = typer.Argument(...),
    quantity: float = typer.Argument(...),
    unit: str = typer.Option("pieces"),
    category: str = typer.Option("other"),
    expires: str | None = typer.Option(None, help="Expiry date, YYYY-MM-DD"),
) -> None:
    """Add an ingredient to your inventory."""
    store = _load_store()
    try:
        created = asyncio.run(
            store.add_ingredient(
                IngredientCreate(
                    name=name,
                    quantity=quantity,
                    unit=unit,
                    category=category,
                    expiry_date=date.fromisoformat(expires) if expires else None,
                )
            )
        )
    except (PantryChefError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"✅ Added {created.quantity:g} {created.unit} {created.name}")


@app.command()
def recipes(
    search: str = typer.Option("", help="Search title and description"),
    difficulty: str = typer.Option("All"),
    cuisine: str = typer.Option("All"),
) -> None:
    """List your saved recipes."""
    from pantry_chef.domain import filter_recipes

    store = _load_store()
    asyncio.run(store.fetch_recipes())

    table = Table(title="Recipes")
    for column in ("Title", "Cuisine", "Difficulty", "Time", "Serves"):
        table.add_column(column)
    for recipe in filter_recipes(store.recipes, search, difficulty, cuisine):
        table.add_row(
            recipe.title,
            recipe.cuisine,
            recipe.difficulty,
            f"{recipe.prep_time + recipe.cook_time} min",
            str(recipe.servings),
        )
    console.print(table)


@app.command()
def plan(
    week: str | None = typer.Option(None, help="Any date in the week, YYYY-MM-DD (default: this week)"),
    add: str | None = typer.Option(None, help="Add a meal on this date, YYYY-MM-DD"),
    meal: str = typer.Option("lunch", help="breakfast, lunch or dinner"),
    notes: str | None = typer.Option(None),
) -> None:
    """Show the weekly meal plan, or add a meal to it."""
    from pantry_chef.domain import meal_for_day, week_coverage, week_days
    from pantry_chef.models import MEAL_TYPES

    try:
        day = date.fromisoformat(week) if week else date.today()
        new_meal = MealPlanCreate(date=date.fromisoformat(add), meal_type=meal, notes=notes) if add else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    store = _load_store()

    async def run() -> None:
        await store.fetch_meal_plans()
        await store.fetch_recipes()
        if new_meal:
            await store.add_meal_plan(new_meal)

    try:
        asyncio.run(run())
    except PantryChefError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    titles = {recipe.id: recipe.title for recipe in store.recipes}
    days = week_days(day)

    table = Table(title=f"{days[0]:%b %d} - {days[-1]:%b %d, %Y}")
    table.add_column("")
    for d in days:
        table.add_column(f"{d:%a %d}")
    for meal_type in MEAL_TYPES:
        row = []
        for d in days:
            entry = meal_for_day(store.meal_plans, d, meal_type)
            if entry is None:
                row.append("")
            else:
                row.append(titles.get(entry.recipe_id or "", entry.notes or "Planned Meal"))
        table.add_row(meal_type.capitalize(), *row)

    console.print(table)
    console.print(f"Week planned: {week_coverage(store.meal_plans, day)}%")


@app.command()
def dashboard() -> None:
    """Kitchen overview: stock, expiring items, today's meals."""
    from pantry_chef.domain import dashboard_stats, expiring_soon
    from pantry_chef.domain.dashboard import recent_recipes
    from pantry_chef.domain.inventory import days_until_expiry

    store = _load_store()

    async def run() -> None:
        await store.fetch_ingredients()
        await store.fetch_recipes()
        await store.fetch_meal_plans()

    asyncio.run(run())
    stats = dashboard_stats(store.ingredients, store.recipes, store.meal_plans)

    console.print(
        Panel.fit(
            f"Ingredients: {stats.total_ingredients}\n"
            f"Recipes: {stats.total_recipes}\n"
            f"Expiring soon: {stats.expiring_soon}\n"
            f"Meals today: {stats.meals_today}",
            title=f"Welcome back, {store.user.email}",
            border_style="green",
        )
    )
    for item in expiring_soon(store.ingredients)[:5]:
        console.print(f"  ⚠️  {item.name}: {days_until_expiry(item.expiry_date)} days")
    for recipe in recent_recipes(store.recipes):
        console.print(f"  🍽  {recipe.title}")


# =============================================================================
# Diagnostics
# =============================================================================


@app.command()
def health(
    ping: bool = typer.Option(False, "--ping", help="Also send a test prompt to Gemini"),
) -> None:
    """Check configuration (and optionally the Gemini connection)."""
    from pantry_chef.config import get_settings

    console.print("\n[bold]Pantry Chef Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)

    console.print("✅ Configuration loaded")
    console.print(f"   Environment: {settings.pantry_env}")
    console.print(f"   Log level: {settings.log_level}")

    if settings.supabase_url.startswith("https://"):
        console.print("✅ Supabase URL configured")
    else:
        console.print("❌ Supabase URL missing or invalid")

    if settings.gemini_api_key:
        console.print(f"✅ Gemini API key configured (model {settings.gemini_model})")
    else:
        console.print("❌ Gemini API key not configured")

    if ping:
        ok = asyncio.run(_assistant().test_connection())
        console.print("✅ Gemini answered" if ok else "❌ Gemini connection failed")
        if not ok:
            raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from pantry_chef import __version__

    console.print(f"Pantry Chef version {__version__}")


if __name__ == "__main__":
    app()
