from portal.models import UserRole

GREETING = "Hi there! How can I help you today?"

CANNED_REPLIES = {
    UserRole.student: "Thanks for your message! I'll help you with that. "
                      "Please allow some time for our team to process your request.",
    UserRole.admin: "Got it! Is there anything else you need assistance with regarding the admin panel?",
}


def support_reply(role: UserRole) -> str:
    return CANNED_REPLIES.get(role, GREETING)
