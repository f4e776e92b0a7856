SARIF_SCHEMA_URI = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
SARIF_VERSION = "2.1.0"

TOOL_NAME = "Perl Critic"
TOOL_FULL_NAME = "Perl::Critic"
TOOL_INFORMATION_URI = "https://metacpan.org/pod/Perl::Critic"

# Help links are built from the original policy string, not the derived id.
POLICY_HELP_BASE_URI = "https://metacpan.org/pod/"
POLICY_ID_PREFIX = "perl/"
POLICY_NAMESPACE_DEPTH = 4
POLICY_SEPARATOR = "::"

PROJECT_URI_BASE_ID = "PROJECT"
PROJECT_URI = "project"

DEFAULT_REMOTE = "origin"
DETACHED_HEAD = "(detached head)"
