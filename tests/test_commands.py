from courtside.tui.commands import COMMANDS, parse_command


def test_plain_text_is_not_a_command():
    assert parse_command("Who covers tonight?") is None
    assert parse_command("/") is None


def test_command_with_args():
    cmd = parse_command("  /Player LeBron James ")
    assert cmd.name == "player"
    assert cmd.args == "LeBron James"


def test_command_without_args():
    cmd = parse_command("/parlay")
    assert cmd.name == "parlay"
    assert cmd.args == ""


def test_unknown_command_still_parsed():
    cmd = parse_command("/futures")
    assert cmd.name == "futures"
    assert cmd.name not in COMMANDS
