# audio/backend.py
import io
import logging

import pygame

from config import AudioConfig

class AudioBackend:
    """
    pygame.mixer 包裝：
    - open()/close() 明確的生命週期，整個程式只開一次
    - decode(bytes) -> Sound
    - trigger(sound) 觸發即忘（不等播放結束）
    """
    def __init__(self, cfg: AudioConfig):
        self.cfg = cfg
        self.ready = False

    def open(self) -> bool:
        if self.ready:
            return True
        try:
            # pygame.init() 可能已用預設值開過 mixer
            if pygame.mixer.get_init():
                pygame.mixer.quit()
            pygame.mixer.pre_init(self.cfg.sample_rate, -16, 2, self.cfg.buffer)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(self.cfg.channels)
            self.ready = True
            logging.info("Mixer ready: %s", pygame.mixer.get_init())
        except pygame.error as e:
            logging.error("Mixer init failed, running silent: %s", e)
            self.ready = False
        return self.ready

    def close(self):
        if not self.ready:
            return
        try:
            pygame.mixer.stop()
        finally:
            pygame.mixer.quit()
            self.ready = False

    def decode(self, data: bytes) -> pygame.mixer.Sound:
        return pygame.mixer.Sound(file=io.BytesIO(data))

    def trigger(self, sound: pygame.mixer.Sound):
        sound.play()

    def length(self, sound: pygame.mixer.Sound) -> float:
        return sound.get_length()
