# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

from utils.crashlog import configure, setup_crashlog, log_exception, log_dir

import argparse
from config import AppConfig, RenderConfig, KeyboardConfig, AudioConfig
import logging, traceback

def _init_logging(level: str = "INFO"):
    logs = log_dir()
    log_path = os.path.join(logs, "app.log")

    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        encoding="utf-8"
    )
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logging.getLogger().addHandler(fh)
    except OSError:
        logging.warning("無法建立 %s，只輸出到主控台", log_path)

def build_config(argv=None) -> AppConfig:
    ap = argparse.ArgumentParser(prog="piano-rec", description="Keyboard piano with note recording")
    ap.add_argument('--assets', default='piano-mp3', help='folder holding <note>.mp3 samples')
    ap.add_argument('--ext', default='.mp3', help='sample file extension')
    ap.add_argument('--octave', type=int, default=4, choices=range(0, 8))
    ap.add_argument('--range', dest='key_range', default='88', choices=['88', '76', '61'])
    ap.add_argument('--open', dest='open_path', default=None, help='recording JSON to load at startup')
    ap.add_argument('--log-dir', default=None, help='folder for app.log and crash reports (default: ./logs)')
    ap.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    args = ap.parse_args(argv)

    cfg = AppConfig(
        render=RenderConfig(key_range=args.key_range),
        keyboard=KeyboardConfig(initial_octave=args.octave),
        audio=AudioConfig(asset_dir=args.assets, asset_ext=args.ext),
        open_path=args.open_path,
        log_level=args.log_level,
        log_dir=args.log_dir,
    )
    return cfg

def main():
    cfg = build_config()
    configure(cfg.log_dir)
    setup_crashlog()
    _init_logging(cfg.log_level)
    logging.info("應用程式啟動")

    from app import App
    App(cfg).run()

if __name__ == '__main__':
    try:
        main()
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("未捕捉的例外：%s", e, exc_info=True)
        print("程式發生錯誤，請到 logs/ 資料夾看 app.log 與 error-*.txt")
        traceback.print_exc()
