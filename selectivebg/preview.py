"""Interactive matplotlib preview of the pipeline's intermediate images."""
from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np


class Preview:
    def __init__(self):
        plt.ion()
        self._images: dict[str, object] = {}

    def show(self, name: str, image: np.ndarray) -> None:
        arr = np.asarray(image)
        if arr.ndim == 3 and arr.shape[2] == 1:
            arr = arr[:, :, 0]
        handle = self._images.get(name)
        if handle is None:
            fig = plt.figure(name)
            ax = fig.add_subplot(1, 1, 1)
            ax.set_title(name)
            ax.axis("off")
            self._images[name] = ax.imshow(arr, cmap="gray" if arr.ndim == 2 else None)
            return
        handle.set_data(arr)
        if arr.ndim == 2:
            # maps are unnormalised counts
            handle.set_clim(float(arr.min()), float(max(arr.max(), 1)))

    def wait(self, ms: int) -> None:
        """Let the windows refresh for ``ms`` milliseconds; 0 blocks until they are closed."""
        if ms <= 0:
            plt.ioff()
            plt.show()
            return
        plt.pause(ms / 1000.0)

    def close(self) -> None:
        plt.close("all")
        self._images.clear()
