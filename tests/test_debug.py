from spriteengine import debug


def test_log_info_goes_to_stdout(capsys):
    debug.log_info("hello")
    captured = capsys.readouterr()
    assert captured.out == "[INFO] hello\n"
    assert captured.err == ""


def test_log_warning_goes_to_stdout(capsys):
    debug.log_warning("careful")
    captured = capsys.readouterr()
    assert captured.out == "[WARNING] careful\n"
    assert captured.err == ""


def test_log_error_goes_to_stderr(capsys):
    debug.log_error("broken")
    captured = capsys.readouterr()
    assert captured.err == "[ERROR] broken\n"
    assert captured.out == ""


def test_initialize_and_shutdown_messages(capsys):
    debug.initialize()
    debug.shutdown()
    out = capsys.readouterr().out
    assert out.splitlines() == ["Engine Initialized", "Engine Shutdown"]