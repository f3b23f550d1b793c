import unittest

from services.desktop.window_manager import Position, Size, WindowId, WindowManager


def _assert_minimized_implies_open(case: unittest.TestCase, manager: WindowManager) -> None:
    for rec in manager.windows():
        if rec.is_minimized:
            case.assertTrue(rec.is_open, f"{rec.id.value} minimized while closed")


class TestWindowManagerDefaults(unittest.TestCase):
    def test_one_record_per_kind(self):
        manager = WindowManager()
        ids = {rec.id for rec in manager.windows()}
        self.assertEqual(ids, set(WindowId))

    def test_only_wallet_starts_open(self):
        manager = WindowManager()
        self.assertTrue(manager.get(WindowId.WALLET).is_open)
        self.assertEqual(manager.get("wallet").z_index, 1)
        self.assertEqual(manager.highest_z_index, 1)
        for wid in (WindowId.SEND, WindowId.RECEIVE, WindowId.SWAP, WindowId.TRANSACTIONS, WindowId.NFTS):
            self.assertFalse(manager.get(wid).is_open)
            self.assertEqual(manager.get(wid).z_index, 0)

    def test_managers_do_not_share_records(self):
        a = WindowManager()
        b = WindowManager()
        a.open("send")
        a.update_position("wallet", Position(1, 2))
        self.assertFalse(b.get("send").is_open)
        self.assertEqual(b.get("wallet").position, Position(80, 60))

    def test_get_returns_copy(self):
        manager = WindowManager()
        rec = manager.get("wallet")
        rec.is_open = False
        self.assertTrue(manager.get("wallet").is_open)

    def test_unknown_id_raises(self):
        manager = WindowManager()
        with self.assertRaises(ValueError):
            manager.open("calculator")


class TestWindowLifecycle(unittest.TestCase):
    def setUp(self):
        self.manager = WindowManager()

    def test_open_puts_window_on_top(self):
        self.manager.open("send")
        send = self.manager.get("send")
        self.assertTrue(send.is_open)
        self.assertFalse(send.is_minimized)
        self.assertEqual(send.z_index, 2)
        self.assertEqual(self.manager.highest_z_index, 2)

    def test_open_already_open_still_brings_to_front(self):
        self.manager.open("send")
        self.manager.open("swap")
        self.manager.open("send")
        self.assertGreater(self.manager.get("send").z_index, self.manager.get("swap").z_index)
        self.assertTrue(self.manager.get("send").is_open)

    def test_open_clears_minimized(self):
        self.manager.minimize("wallet")
        self.manager.open("wallet")
        self.assertFalse(self.manager.get("wallet").is_minimized)

    def test_close_keeps_geometry(self):
        self.manager.open("swap")
        z = self.manager.get("swap").z_index
        self.manager.close("swap")
        swap = self.manager.get("swap")
        self.assertFalse(swap.is_open)
        self.assertEqual(swap.position, Position(350, 80))
        self.assertEqual(swap.size, Size(400, 500))
        self.assertEqual(swap.z_index, z)

    def test_close_is_idempotent(self):
        self.manager.open("receive")
        self.manager.close("receive")
        once = (self.manager.windows(), self.manager.highest_z_index, self.manager.flashing_window)
        self.manager.close("receive")
        twice = (self.manager.windows(), self.manager.highest_z_index, self.manager.flashing_window)
        self.assertEqual(once, twice)

    def test_minimize_keeps_geometry_and_stack_slot(self):
        before = self.manager.get("wallet")
        self.manager.minimize("wallet")
        after = self.manager.get("wallet")
        self.assertTrue(after.is_open)
        self.assertTrue(after.is_minimized)
        self.assertEqual(after.position, before.position)
        self.assertEqual(after.z_index, before.z_index)

    def test_minimize_closed_window_is_noop(self):
        self.manager.minimize("nfts")
        self.assertFalse(self.manager.get("nfts").is_minimized)
        _assert_minimized_implies_open(self, self.manager)

    def test_close_minimized_window(self):
        self.manager.minimize("wallet")
        self.manager.close("wallet")
        wallet = self.manager.get("wallet")
        self.assertFalse(wallet.is_open)
        self.assertFalse(wallet.is_minimized)

    def test_restore_assigns_fresh_z_index(self):
        self.manager.open("send")
        self.manager.minimize("wallet")
        self.manager.restore("wallet")
        wallet = self.manager.get("wallet")
        self.assertFalse(wallet.is_minimized)
        self.assertGreater(wallet.z_index, self.manager.get("send").z_index)

    def test_bring_to_front_on_closed_window(self):
        self.manager.bring_to_front("transactions")
        rec = self.manager.get("transactions")
        self.assertFalse(rec.is_open)
        self.assertEqual(rec.z_index, self.manager.highest_z_index)

    def test_focus_operations_give_unique_top(self):
        ops = [
            ("open", "send"), ("open", "swap"), ("bring_to_front", "wallet"),
            ("minimize", "swap"), ("restore", "swap"), ("open", "nfts"),
            ("bring_to_front", "send"), ("close", "nfts"), ("open", "nfts"),
        ]
        for op, wid in ops:
            getattr(self.manager, op)(wid)
            _assert_minimized_implies_open(self, self.manager)
            if op in ("open", "restore", "bring_to_front"):
                target = self.manager.get(wid).z_index
                others = [r.z_index for r in self.manager.windows() if r.id.value != wid]
                self.assertTrue(all(target > z for z in others))

    def test_counter_never_decreases(self):
        seen = [self.manager.highest_z_index]
        for wid in ("send", "wallet", "swap"):
            self.manager.open(wid)
            self.manager.close(wid)
            self.manager.minimize(wid)
            seen.append(self.manager.highest_z_index)
        self.assertEqual(seen, sorted(seen))
        self.assertEqual(len(set(seen)), len(seen))

    def test_visible_windows_in_paint_order(self):
        self.manager.open("send")
        self.manager.open("swap")
        self.manager.bring_to_front("wallet")
        self.manager.minimize("swap")
        order = [rec.id for rec in self.manager.visible_windows()]
        self.assertEqual(order, [WindowId.SEND, WindowId.WALLET])


class TestWindowGeometry(unittest.TestCase):
    def test_position_and_size_are_not_clamped(self):
        manager = WindowManager()
        manager.update_position("wallet", Position(-5000, 99999))
        manager.update_size("wallet", Size(0, -10))
        wallet = manager.get("wallet")
        self.assertEqual(wallet.position, Position(-5000, 99999))
        self.assertEqual(wallet.size, Size(0, -10))

    def test_geometry_does_not_touch_stack(self):
        manager = WindowManager()
        manager.update_position("send", Position(10, 10))
        self.assertEqual(manager.highest_z_index, 1)


class TestDockAndSummon(unittest.TestCase):
    def test_activate_opens_closed(self):
        manager = WindowManager()
        manager.activate("swap")
        self.assertTrue(manager.get("swap").is_open)
        self.assertEqual(manager.get("swap").z_index, manager.highest_z_index)

    def test_activate_restores_minimized(self):
        manager = WindowManager()
        manager.minimize("wallet")
        manager.activate("wallet")
        self.assertFalse(manager.get("wallet").is_minimized)
        self.assertEqual(manager.highest_z_index, 2)

    def test_activate_visible_window_is_noop(self):
        manager = WindowManager()
        manager.activate("wallet")
        self.assertEqual(manager.highest_z_index, 1)

    def test_summon_minimized_window_opens_and_flashes(self):
        manager = WindowManager()
        manager.open("send")
        manager.minimize("wallet")
        manager.summon("wallet")
        wallet = manager.get("wallet")
        self.assertTrue(wallet.is_visible)
        self.assertGreater(wallet.z_index, manager.get("send").z_index)
        self.assertEqual(manager.flashing_window, WindowId.WALLET)

    def test_summon_visible_window_brings_to_front(self):
        manager = WindowManager()
        manager.open("send")
        manager.summon("wallet")
        self.assertEqual(manager.get("wallet").z_index, manager.highest_z_index)
        self.assertEqual(manager.flashing_window, WindowId.WALLET)


class TestFlashSlot(unittest.TestCase):
    def test_last_flash_wins(self):
        manager = WindowManager()
        manager.flash("wallet")
        manager.flash("send")
        self.assertEqual(manager.flashing_window, WindowId.SEND)

    def test_clear_flash_is_idempotent(self):
        manager = WindowManager()
        manager.flash("wallet")
        manager.clear_flash()
        manager.clear_flash()
        self.assertIsNone(manager.flashing_window)

    def test_consume_flash_is_one_shot(self):
        manager = WindowManager()
        manager.flash("swap")
        self.assertEqual(manager.consume_flash(), WindowId.SWAP)
        self.assertIsNone(manager.consume_flash())

    def test_flash_is_not_window_state(self):
        manager = WindowManager()
        before = manager.windows()
        manager.flash("wallet")
        self.assertEqual(manager.windows(), before)


if __name__ == "__main__":
    unittest.main()
