from string import Formatter

from termcolor import colored

from headerlint.checks.base import Issue, Severity

###############################################################################
# Output prefixes
###############################################################################

CHECKMARK    = '[' + colored("✓", "green") + ']'
CROSSMARK    = '[' + colored("✗", "red") + ']'
QUESTIONMARK = '[' + colored("?", "yellow") + ']'
INFOMARK     = '[' + colored("i", "blue") + ']'

def _message(prefix: str, raw_prefix: str, *args):
    msg = '\n'.join(str(arg) for arg in args)
    first = True
    for line in msg.split('\n'):
        if first: print(f"{prefix} {line}")
        else:     print(f"{' ' * len(raw_prefix)} {line}")
        first = False

# Use CROSSMARK for errors
def error(*msg): _message(CROSSMARK, '[✗]', *msg)

# Use QUESTIONMARK for warnings
def warning(*msg): _message(QUESTIONMARK, '[?]', *msg)

# Use INFOMARK for information
def info(*msg): _message(INFOMARK, '[i]', *msg)

# Use CHECKMARK for success
def success(*msg): _message(CHECKMARK, '[✓]', *msg)


###############################################################################
# Issues
###############################################################################

def format_issue(issue: Issue) -> str:
    """
    Renders an issue as `path:line > message [code]`, followed by any issue data
    that the message itself does not already mention.
    """
    msg = ''

    if issue.location is not None:
        msg += str(issue.location.path)
        if issue.location.lines:
            msg += ':' + ','.join(str(line) for line in issue.location.lines)
        msg += ' > '
    else:
        msg += '> '

    msg += issue.message
    msg += f" [{issue.code}]"

    used = {name for _, name, _, _ in Formatter().parse(issue.issue_type.message) if name}
    data_str = ', '.join(
        f"{k}={v}" for k, v in (issue.data or {}).items() if v is not None and k not in used
    )
    if data_str:
        msg += f" ({data_str})"

    return msg


def report(issue: Issue) -> None:
    msg = format_issue(issue)
    match issue.issue_type.severity:
        case Severity.ERROR:   error(msg)
        case Severity.WARNING: warning(msg)
