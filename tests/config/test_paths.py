from __future__ import annotations

from pathlib import Path

from grove.core.config.paths import (
    find_settings_file,
    get_config_paths,
    get_user_config_dir,
    list_config_paths,
)


def test_user_config_dir_per_platform() -> None:
    env = {"HOME": "/home/u", "APPDATA": "C:/Users/u/AppData/Roaming"}

    assert get_user_config_dir(env, "win32") == str(Path("C:/Users/u/AppData/Roaming") / "grove")
    assert get_user_config_dir(env, "darwin") == str(Path("/home/u/Library/Application Support/grove"))
    assert get_user_config_dir(env, "linux") == str(Path("/home/u/.config/grove"))
    assert get_user_config_dir({"HOME": "/h", "XDG_CONFIG_HOME": "/x"}, "linux") == str(Path("/x/grove"))


def test_user_config_dir_empty_without_home() -> None:
    assert get_user_config_dir({}, "linux") == ""
    assert get_user_config_dir({}, "win32") == ""


def test_search_order(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit" / "config.yaml"
    env = {"GROVE_CONFIG": str(explicit), "HOME": str(tmp_path / "home")}

    paths = get_config_paths(env, cwd=tmp_path / "cwd", platform="linux")

    assert paths == [
        tmp_path / "explicit",
        tmp_path / "cwd",
        tmp_path / "home" / ".config" / "grove",
        tmp_path / "home",
    ]


def test_explicit_file_beats_cwd(tmp_path: Path) -> None:
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    (cwd / "config.yaml").write_text("general: {}\n", encoding="utf-8")
    explicit = tmp_path / "elsewhere" / "my-settings.yaml"
    explicit.parent.mkdir()
    explicit.write_text("general: {}\n", encoding="utf-8")

    found = find_settings_file({"GROVE_CONFIG": str(explicit)}, cwd=cwd, platform="linux")

    assert found == explicit


def test_missing_explicit_file_falls_back_to_search(tmp_path: Path) -> None:
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    (cwd / "config.yml").write_text("{}\n", encoding="utf-8")

    found = find_settings_file({"GROVE_CONFIG": str(tmp_path / "nope.yaml")}, cwd=cwd, platform="linux")

    assert found == cwd / "config.yml"


def test_yaml_preferred_over_yml(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text("{}\n", encoding="utf-8")
    (tmp_path / "config.yml").write_text("{}\n", encoding="utf-8")

    assert find_settings_file({}, cwd=tmp_path, platform="linux") == tmp_path / "config.yaml"


def test_nothing_found(tmp_path: Path) -> None:
    assert find_settings_file({"HOME": str(tmp_path / "home")}, cwd=tmp_path, platform="linux") is None


def test_list_config_paths(tmp_path: Path) -> None:
    home = tmp_path / "home"
    user_dir = home / ".config" / "grove"
    user_dir.mkdir(parents=True)
    (user_dir / "config.yml").write_text("{}\n", encoding="utf-8")

    infos = list_config_paths({"HOME": str(home)}, cwd=tmp_path / "cwd", platform="linux")

    assert [info.priority for info in infos] == [1, 2, 3]
    assert [info.exists for info in infos] == [False, True, False]
    assert infos[1].file == user_dir / "config.yml"
    assert infos[0].file is None


def test_defaults_to_process_environment(project_dir: Path) -> None:
    (project_dir / "config.yaml").write_text("{}\n", encoding="utf-8")

    assert find_settings_file().resolve() == (project_dir / "config.yaml").resolve()
