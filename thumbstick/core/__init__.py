"""Signal core: types, joint extraction and the stick state machine."""
