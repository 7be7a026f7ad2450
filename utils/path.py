# utils/path.py
import sys, os

def project_root() -> str:
    return getattr(sys, "_MEIPASS", os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

def asset_dir(path: str) -> str:
    """
    音檔資料夾：絕對路徑原樣回傳；
    相對路徑先找目前工作目錄，找不到再找專案根目錄（或 PyInstaller 的暫存目錄）。
    """
    if os.path.isabs(path):
        return path
    if os.path.isdir(path):
        return os.path.abspath(path)
    return os.path.join(project_root(), path)
