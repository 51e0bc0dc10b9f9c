from .assert_set import AssertSet as AssertSet
