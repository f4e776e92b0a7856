from perl_critic_sarif.config import POLICY_ID_PREFIX, POLICY_NAMESPACE_DEPTH, POLICY_SEPARATOR


def camel_to_snake(segment: str) -> str:
    """Convert ``ProhibitLocalVars`` into ``prohibit_local_vars``."""
    chars: list[str] = []
    for i, ch in enumerate(segment):
        if ch.isupper():
            if i > 0:
                chars.append("_")
            chars.append(ch.lower())
        else:
            chars.append(ch)
    return "".join(chars)


def _policy_segments(policy: str) -> list[str]:
    # Perl::Critic::Policy::<Category>:: is namespace, not rule identity.
    return policy.split(POLICY_SEPARATOR)[POLICY_NAMESPACE_DEPTH:]


def policy_to_id(policy: str) -> str:
    """Derive the SARIF rule id, e.g. ``perl/prohibit_local_vars``.

    Policies with fewer than five segments yield a bare ``perl/``.
    """
    return POLICY_ID_PREFIX + "/".join(camel_to_snake(s) for s in _policy_segments(policy))


def policy_to_name(policy: str) -> str:
    """Derive the display name, e.g. ``ProhibitLocalVars``."""
    return "".join(_policy_segments(policy))
