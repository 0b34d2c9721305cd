"""Welcome direct messages."""


def build_welcome_message(community: str, verified: bool, first_name: str) -> str:
    """Compose the welcome message sent after onboarding.

    Args:
        community: Community display name
        verified: Whether the member received the full tier
        first_name: Name to greet verified members with

    Returns:
        Message body
    """
    if verified:
        return (
            f"Welcome to {community}, {first_name}! 🎉\n\n"
            "Your subscription is active and you now have access to all member channels.\n\n"
            "**Getting Started:**\n"
            "• Check out #announcements for the latest updates\n"
            "• Introduce yourself in #general\n"
            "• Ask questions in #support if you need help\n\n"
            "If you have any questions, the team is here to help!"
        )
    return (
        f"Welcome to {community}! 👋\n\n"
        "We couldn't automatically verify your subscription. "
        "If you're a subscriber, please contact support to get your Member role.\n\n"
        "If you're just checking things out, feel free to look around!"
    )
