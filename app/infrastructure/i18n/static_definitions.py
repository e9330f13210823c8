"""Static translation definitions shipped with the application.

This is the irreducible fallback baseline: every bundle contains at least
these keys, and the publish job registers them in the database so
translators can override them per language.
"""

from typing import Dict, Tuple

from infrastructure.i18n.models import TranslationDefinition

STATIC_TRANSLATION_DEFINITIONS: Tuple[TranslationDefinition, ...] = (
    TranslationDefinition(
        "greeting.title",
        "Hi, {name}",
        "Greeting headline above the chat input. Use {name} as the placeholder "
        "for the user's first name.",
    ),
    TranslationDefinition(
        "greeting.subtitle",
        "How can I help you today?",
        "Secondary greeting line beneath the hero title.",
    ),
    TranslationDefinition(
        "user_menu.resources", "Resources", "Dropdown label for the resources submenu."
    ),
    TranslationDefinition(
        "user_menu.language", "Language", "Dropdown label for language selection submenu."
    ),
    TranslationDefinition(
        "user_menu.language.active",
        "Active",
        "Chip label indicating the currently selected language.",
    ),
    TranslationDefinition(
        "user_menu.language.updating",
        "Updating…",
        "Helper text shown while a new language is being applied.",
    ),
    TranslationDefinition(
        "user_menu.theme.light", "Light mode", "Menu action to switch to light theme."
    ),
    TranslationDefinition(
        "user_menu.theme.dark", "Dark mode", "Menu action to switch to dark theme."
    ),
    TranslationDefinition(
        "user_menu.sign_out", "Sign out", "Menu action to sign out of the application."
    ),
    TranslationDefinition(
        "user_menu.manage_subscriptions",
        "Manage Subscriptions",
        "Menu item leading to subscriptions management.",
    ),
    TranslationDefinition(
        "user_menu.manage_subscriptions_status_checking",
        "Checking plan...",
        "Helper text while subscription plan is loading.",
    ),
    TranslationDefinition(
        "user_menu.manage_subscriptions_status_fallback",
        "Free Plan",
        "Fallback label when plan information is unavailable.",
    ),
    TranslationDefinition(
        "user_menu.upgrade_plan", "Upgrade plan", "Menu item leading to plan upgrade page."
    ),
    TranslationDefinition(
        "user_menu.profile", "Profile", "Menu item linking to the user profile page."
    ),
    TranslationDefinition(
        "user_menu.loading",
        "Loading user menu",
        "SR-only label shown while the menu state is loading.",
    ),
    TranslationDefinition(
        "user_menu.open_menu",
        "Open menu",
        "SR-only label for the unauthenticated menu button.",
    ),
    TranslationDefinition(
        "user_menu.resources.about", "About Us", "Link to the about page."
    ),
    TranslationDefinition(
        "user_menu.resources.contact", "Contact Us", "Link to the contact section."
    ),
    TranslationDefinition(
        "user_menu.resources.privacy", "Privacy Policy", "Link to privacy policy page."
    ),
    TranslationDefinition(
        "user_menu.resources.terms", "Terms of Service", "Link to terms of service page."
    ),
    TranslationDefinition("common.cancel", "Cancel", "Generic cancel action label."),
    TranslationDefinition("common.close", "Close", "Generic close action label."),
    TranslationDefinition("common.clear", "Clear", "Generic clear/reset action label."),
    TranslationDefinition(
        "navigation.back_to_home",
        "Back to home",
        "Text for links that return to the home page.",
    ),
    TranslationDefinition(
        "legal.privacy.title", "Privacy Policy", "Heading for the privacy policy page."
    ),
    TranslationDefinition(
        "legal.terms.title", "Terms of Service", "Heading for the terms of service page."
    ),
    TranslationDefinition(
        "legal.last_updated_prefix",
        "Last updated",
        "Prefix used before the legal document last updated date.",
    ),
    TranslationDefinition("login.cta", "Sign in", "Primary button label on the login page."),
    TranslationDefinition(
        "login.forgot_password",
        "Forgot password?",
        "Link copy for the forgot password action on the login page.",
    ),
    TranslationDefinition(
        "login.signup_prompt_prefix",
        "Don't have an account?",
        "Prefix text before the sign-up link on the login page.",
    ),
    TranslationDefinition(
        "login.signup_prompt_link",
        "Sign up",
        "Link text that navigates to the registration page.",
    ),
    TranslationDefinition(
        "login.error.invalid_credentials",
        "Invalid credentials. Please try again.",
        "Error shown when the login credentials are incorrect.",
    ),
    TranslationDefinition(
        "register.cta", "Sign Up", "Primary button label on the registration page."
    ),
    TranslationDefinition(
        "register.error.account_exists",
        "Account already exists!",
        "Toast message when the email is already registered.",
    ),
    TranslationDefinition(
        "register.error.failed",
        "Failed to create account!",
        "Toast message when registration fails unexpectedly.",
    ),
    TranslationDefinition(
        "auth.email_label", "Email Address", "Label for the email input on auth forms."
    ),
    TranslationDefinition(
        "auth.password_label", "Password", "Label for the password input on auth forms."
    ),
    TranslationDefinition("offline.title", "You're offline", "Heading for the offline page."),
    TranslationDefinition(
        "offline.message",
        "No internet connection detected. Once you're back online, you can keep "
        "chatting in the browser or installed app.",
        "Message shown on the offline page.",
    ),
    TranslationDefinition(
        "offline.retry",
        "Retry connection",
        "Button label to retry connection on the offline page.",
    ),
    TranslationDefinition(
        "chat.input.placeholder",
        "Send a message...",
        "Placeholder text for the main chat input.",
    ),
    TranslationDefinition(
        "chat.history.load_more",
        "Load more",
        "Button label to load older conversations in the history sidebar.",
    ),
    TranslationDefinition(
        "chat.history.loading",
        "Loading...",
        "Helper text while older conversations are loading.",
    ),
    TranslationDefinition(
        "chat.language.ui_prompt.title",
        "Change interface language?",
        "Title for the UI language change confirmation dialog.",
    ),
    TranslationDefinition(
        "chat.language.ui_prompt.description",
        "Do you also want the interface language to change to {language}?",
        "Body text for the UI language change confirmation dialog.",
    ),
    TranslationDefinition(
        "chat.language.ui_prompt.cancel",
        "No, keep interface",
        "Cancel button label for the UI language change dialog.",
    ),
    TranslationDefinition(
        "chat.language.ui_prompt.confirm",
        "Yes, change interface",
        "Confirm button label for the UI language change dialog.",
    ),
    TranslationDefinition(
        "chat.language.ui_prompt.loading",
        "Switching interface language...",
        "Loading text shown while the UI language is changing.",
    ),
)

# Hardcoded phrases for languages whose culture/script-specific strings have
# not been migrated to the database yet. Enumerated explicitly; languages not
# listed here get no seed phrases.
SEED_PHRASES: Dict[str, Dict[str, str]] = {
    "kha": {
        "greeting.subtitle": "Kumno nga lah ban iarap ia phi mynta?",
        "user_menu.language": "Ktien",
        "user_menu.sign_out": "Mih noh",
        "common.cancel": "Pynsangeh",
        "common.close": "Khang",
    },
}


def build_static_dictionary(
    definitions: Tuple[TranslationDefinition, ...] = STATIC_TRANSLATION_DEFINITIONS,
) -> Dict[str, str]:
    """Map every definition's key to its default text."""
    return {definition.key: definition.default_text for definition in definitions}


def seed_phrases_for(
    code: str, seed_phrases: Dict[str, Dict[str, str]] = SEED_PHRASES
) -> Dict[str, str]:
    """Return the seed phrases enumerated for ``code`` (possibly empty)."""
    return dict(seed_phrases.get(code.strip().lower(), {}))
