import os

import pytest
from exjs.env import ENV_EXJS_LOG_LEVEL, ENV_EXJS_NO_OPTIMIZE, EnvVars


@pytest.fixture
def vars(monkeypatch: pytest.MonkeyPatch) -> EnvVars:
	monkeypatch.delenv(ENV_EXJS_LOG_LEVEL, raising=False)
	monkeypatch.delenv(ENV_EXJS_NO_OPTIMIZE, raising=False)
	return EnvVars()


class TestLogLevel:
	def test_default(self, vars: EnvVars):
		assert vars.log_level == "WARNING"

	def test_from_environment(self, vars: EnvVars, monkeypatch: pytest.MonkeyPatch):
		monkeypatch.setenv(ENV_EXJS_LOG_LEVEL, "debug")
		assert vars.log_level == "DEBUG"

	def test_setter_writes_environment(
		self, vars: EnvVars, monkeypatch: pytest.MonkeyPatch
	):
		# monkeypatch restores the variable after the test
		monkeypatch.setenv(ENV_EXJS_LOG_LEVEL, "WARNING")
		vars.log_level = "info"
		assert os.environ[ENV_EXJS_LOG_LEVEL] == "info"
		assert vars.log_level == "INFO"


class TestOptimize:
	def test_default_on(self, vars: EnvVars):
		assert vars.optimize is True

	@pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
	def test_truthy_disables(
		self, vars: EnvVars, monkeypatch: pytest.MonkeyPatch, value: str
	):
		monkeypatch.setenv(ENV_EXJS_NO_OPTIMIZE, value)
		assert vars.optimize is False

	@pytest.mark.parametrize("value", ["", "0", "false", "no"])
	def test_other_values_keep_it_on(
		self, vars: EnvVars, monkeypatch: pytest.MonkeyPatch, value: str
	):
		monkeypatch.setenv(ENV_EXJS_NO_OPTIMIZE, value)
		assert vars.optimize is True

	def test_setter_round_trip(self, vars: EnvVars, monkeypatch: pytest.MonkeyPatch):
		monkeypatch.setenv(ENV_EXJS_NO_OPTIMIZE, "0")
		vars.optimize = False
		assert os.environ[ENV_EXJS_NO_OPTIMIZE] == "1"
		vars.optimize = True
		assert ENV_EXJS_NO_OPTIMIZE not in os.environ
